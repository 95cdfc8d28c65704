"""
Domain models defined as Pydantic models.
These are pure data structures with shape validation only.

The persisted layout of a user record uses the field name
``personalDocument`` for the nested list of documents, so the ``User`` model
carries that name as its alias and is always serialized by alias.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class PersonalDocument(BaseModel):
    """A named content blob owned by exactly one user record."""

    id: str
    name: str
    content: str = ""


class User(BaseModel):
    """Persisted employee record with its owned personal documents.

    The ``personal_document`` list is ordered: the most recently added
    document is always last.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    role: str = ""
    phone: str = ""
    email: str
    department: str = ""
    personal_document: List[PersonalDocument] = Field(
        default_factory=list, alias="personalDocument"
    )

    def to_list_item(self) -> "UserListItem":
        """Project the record onto the reduced list view."""
        return UserListItem(
            id=self.id,
            name=self.name,
            role=self.role,
            department=self.department,
        )

    def find_personal_document(self, document_id: str) -> int:
        """Return the position of the first document with ``document_id``.

        Returns -1 when the user owns no such document.
        """
        for index, document in enumerate(self.personal_document):
            if document.id == document_id:
                return index
        return -1


class UserListItem(BaseModel):
    """Read-only projection of a User used for bulk listing."""

    id: str
    name: str
    role: str
    department: str


class UserEntry(BaseModel):
    """Request model for creating a user."""

    name: str = ""
    role: str = ""
    phone: str = ""
    email: str
    department: str = ""

    def to_domain_model(self, user_id: str) -> User:
        """Assemble a fresh User with no personal documents."""
        return User(
            id=user_id,
            name=self.name,
            role=self.role,
            phone=self.phone,
            email=self.email,
            department=self.department,
            personal_document=[],
        )


class DepartmentEntry(BaseModel):
    """Request model for moving a user to another department."""

    department: str


class PersonalDocumentEntry(BaseModel):
    """Request model for adding a personal document to a user."""

    name: str
    content: str = ""

    def to_domain_model(self, document_id: str) -> PersonalDocument:
        return PersonalDocument(
            id=document_id, name=self.name, content=self.content
        )


class PersonalDocumentUpdate(BaseModel):
    """Request model for overwriting an existing personal document.

    ``id`` selects the document; ``name`` and ``content`` replace the
    stored values.
    """

    id: str
    name: str
    content: str = ""


class LoginEntry(BaseModel):
    """Request model for looking a user up by email."""

    email: str
