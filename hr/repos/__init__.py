"""
Document store implementations.

Implementation packages:
- memory: In-memory implementation for testing and local runs
- minio: MinIO-based implementation for production
"""
