"""
FormBuilder Backend - Form & Response Schemas
==============================================

What:  Pydantic models for the form CRUD routes and public submissions.
How:   Wire names are camelCase with a Mongo-style `_id`, which is what the
       form-builder frontend reads. Python code uses the snake_case field
       names (populate_by_name); FastAPI serializes responses by alias.

Opaque payloads:
    `formData` items and `responseData` are `JsonValue`: any JSON value
    (null, bool, number, string, array, object). They are stored and
    returned untouched.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, JsonValue


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class FormDataRequest(BaseModel):
    """
    Body of POST /addFormData and POST /updateFormData/{id}.

    On update each field that is present replaces the stored value
    wholesale; an omitted (or null) field keeps the stored value. On create
    an omitted title is "" and omitted fields are [].
    """
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(default=None, max_length=500, description="Form title")
    form_data: Optional[List[JsonValue]] = Field(
        default=None,
        alias="formData",
        description="Ordered field definitions (opaque to the server)",
    )


class SubmitResponseRequest(BaseModel):
    """Body of POST /addFormResponse/{formId}."""
    model_config = ConfigDict(populate_by_name=True)

    response_data: JsonValue = Field(
        default=None,
        alias="responseData",
        description="Submitted answers (opaque to the server)",
    )
    name: str = Field(default="", max_length=255, description="Submitter's name")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class FormOut(BaseModel):
    """Full representation of a form, as returned by every form route."""
    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID = Field(alias="_id", description="Form identifier")
    user_id: uuid.UUID = Field(alias="userId", description="Owner account identifier")
    title: str
    form_data: List[JsonValue] = Field(alias="formData")
    responses: List[str] = Field(
        default_factory=list,
        description="Identifiers of submitted responses",
    )
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")


class FormListResponse(BaseModel):
    """Returned by GET /getForms."""
    forms: List[FormOut]


class UpdateFormResponse(BaseModel):
    """Returned by POST /updateFormData/{id}."""
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(default="Form data updated successfully")
    updated_form: FormOut = Field(alias="updatedForm")


class DeleteFormResponse(BaseModel):
    """Returned by DELETE /deleteFormData/{id}: the form as it was."""
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(default="Form data deleted successfully")
    deleted_form: FormOut = Field(alias="deletedForm")


class ResponseOut(BaseModel):
    """One collected submission."""
    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID = Field(alias="_id")
    form_id: uuid.UUID = Field(alias="formId")
    response_data: JsonValue = Field(default=None, alias="responseData")
    name: str
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")


class ResponseListResponse(BaseModel):
    """Returned by GET /getFormResponses/{formId}."""
    responses: List[ResponseOut]
