"""
FormBuilder Backend - Form Service Unit Tests
==============================================

What:  Tests for FormService business logic (create, list, get, update,
       delete, list responses).
How:   Uses mock DB sessions (no real DB).

What we test:
    ✅ Create stores the caller as owner and returns the wire shape
    ✅ Form not found raises NotFoundError
    ✅ Update/delete/list-responses by a non-owner raise ForbiddenError
    ✅ Delete returns a snapshot and removes the form's responses
    ✅ Storage failures are wrapped in DatabaseError
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from formbuilder.exceptions import DatabaseError, ForbiddenError, NotFoundError
from formbuilder.models.form import Form
from formbuilder.models.response import FormResponse
from formbuilder.services.form_service import FormService, form_to_out


def _make_form(owner_id=None, **overrides) -> Form:
    values = {
        "id": uuid.uuid4(),
        "owner_id": owner_id or uuid.uuid4(),
        "title": "Survey",
        "form_data": [{"type": "text", "label": "Name"}],
        "response_ids": [],
        "created_at": datetime.now(timezone.utc),
    }
    values.update(overrides)
    return Form(**values)


class TestFormToOut:

    def test_wire_shape_uses_camel_case_and_mongo_id(self):
        form = _make_form(response_ids=["r1", "r2"])
        body = form_to_out(form).model_dump(mode="json", by_alias=True)

        assert set(body) == {"_id", "userId", "title", "formData", "responses", "createdAt"}
        assert body["_id"] == str(form.id)
        assert body["userId"] == str(form.owner_id)
        assert body["responses"] == ["r1", "r2"]


class TestCreateAndList:

    def setup_method(self):
        self.service = FormService()

    @pytest.mark.asyncio
    async def test_create_form_sets_owner(self, mock_db_session):
        owner_id = uuid.uuid4()

        def assign_defaults(obj):
            obj.id = uuid.uuid4()
            obj.created_at = datetime.now(timezone.utc)

        mock_db_session.add.side_effect = assign_defaults

        result = await self.service.create_form(
            mock_db_session, owner_id=owner_id, title="T", form_data=[{"q": "name"}]
        )

        stored = mock_db_session.add.call_args.args[0]
        assert stored.owner_id == owner_id
        assert result.user_id == owner_id
        assert result.title == "T"
        assert result.form_data == [{"q": "name"}]
        assert result.responses == []
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_form_defaults(self, mock_db_session):
        mock_db_session.add.side_effect = lambda obj: setattr(obj, "id", uuid.uuid4())

        result = await self.service.create_form(mock_db_session, owner_id=uuid.uuid4())

        assert result.title == ""
        assert result.form_data == []

    @pytest.mark.asyncio
    async def test_create_form_database_failure(self, mock_db_session):
        mock_db_session.flush = AsyncMock(side_effect=RuntimeError("disk full"))

        with pytest.raises(DatabaseError):
            await self.service.create_form(mock_db_session, owner_id=uuid.uuid4(), title="T")

    @pytest.mark.asyncio
    async def test_list_forms(self, mock_db_session, db_result):
        owner_id = uuid.uuid4()
        forms = [_make_form(owner_id, title="A"), _make_form(owner_id, title="B")]
        mock_db_session.execute.return_value = db_result(rows=forms)

        result = await self.service.list_forms(mock_db_session, owner_id)

        assert [f.title for f in result.forms] == ["A", "B"]
        assert all(f.user_id == owner_id for f in result.forms)

    @pytest.mark.asyncio
    async def test_list_forms_empty(self, mock_db_session, db_result):
        mock_db_session.execute.return_value = db_result(rows=[])

        result = await self.service.list_forms(mock_db_session, uuid.uuid4())

        assert result.forms == []


class TestGetForm:

    def setup_method(self):
        self.service = FormService()

    @pytest.mark.asyncio
    async def test_get_form_found(self, mock_db_session, db_result):
        form = _make_form()
        mock_db_session.execute.return_value = db_result(form)

        result = await self.service.get_form(mock_db_session, form.id)

        assert result.id == form.id
        assert result.title == "Survey"

    @pytest.mark.asyncio
    async def test_get_form_not_found(self, mock_db_session, db_result):
        mock_db_session.execute.return_value = db_result(None)
        form_id = uuid.uuid4()

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_form(mock_db_session, form_id)

        assert str(form_id) in exc_info.value.message

    @pytest.mark.asyncio
    async def test_get_form_database_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=RuntimeError("gone"))

        with pytest.raises(DatabaseError):
            await self.service.get_form(mock_db_session, uuid.uuid4())


class TestUpdateForm:

    def setup_method(self):
        self.service = FormService()

    @pytest.mark.asyncio
    async def test_update_replaces_title_and_fields(self, mock_db_session, db_result):
        owner_id = uuid.uuid4()
        form = _make_form(owner_id, response_ids=["r1"])
        mock_db_session.execute.return_value = db_result(form)

        result = await self.service.update_form(
            mock_db_session, form.id, owner_id, title="New", form_data=[{"q": "age"}]
        )

        assert result.message == "Form data updated successfully"
        assert result.updated_form.title == "New"
        assert result.updated_form.form_data == [{"q": "age"}]
        assert result.updated_form.responses == ["r1"]

    @pytest.mark.asyncio
    async def test_update_without_fields_keeps_stored_fields(self, mock_db_session, db_result):
        owner_id = uuid.uuid4()
        form = _make_form(owner_id)
        mock_db_session.execute.return_value = db_result(form)

        result = await self.service.update_form(
            mock_db_session, form.id, owner_id, title="Renamed", form_data=None
        )

        assert result.updated_form.title == "Renamed"
        assert result.updated_form.form_data == [{"type": "text", "label": "Name"}]

    @pytest.mark.asyncio
    async def test_update_without_title_keeps_stored_title(self, mock_db_session, db_result):
        owner_id = uuid.uuid4()
        form = _make_form(owner_id)
        mock_db_session.execute.return_value = db_result(form)

        result = await self.service.update_form(
            mock_db_session, form.id, owner_id, form_data=[]
        )

        assert result.updated_form.title == "Survey"
        assert result.updated_form.form_data == []

    @pytest.mark.asyncio
    async def test_update_by_other_account_forbidden(self, mock_db_session, db_result):
        form = _make_form()
        mock_db_session.execute.return_value = db_result(form)

        with pytest.raises(ForbiddenError):
            await self.service.update_form(
                mock_db_session, form.id, uuid.uuid4(), title="Hijack", form_data=[]
            )

        assert form.title == "Survey"
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_missing_form(self, mock_db_session, db_result):
        mock_db_session.execute.return_value = db_result(None)

        with pytest.raises(NotFoundError):
            await self.service.update_form(
                mock_db_session, uuid.uuid4(), uuid.uuid4(), title="T", form_data=[]
            )


class TestDeleteForm:

    def setup_method(self):
        self.service = FormService()

    @pytest.mark.asyncio
    async def test_delete_returns_snapshot(self, mock_db_session, db_result):
        owner_id = uuid.uuid4()
        form = _make_form(owner_id, response_ids=["r1", "r2"])
        mock_db_session.execute.return_value = db_result(form)

        result = await self.service.delete_form(mock_db_session, form.id, owner_id)

        assert result.message == "Form data deleted successfully"
        assert result.deleted_form.id == form.id
        assert result.deleted_form.responses == ["r1", "r2"]
        mock_db_session.delete.assert_awaited_once_with(form)
        # SELECT form, then DELETE its responses
        assert mock_db_session.execute.await_count == 2

    @pytest.mark.asyncio
    async def test_delete_by_other_account_forbidden(self, mock_db_session, db_result):
        form = _make_form()
        mock_db_session.execute.return_value = db_result(form)

        with pytest.raises(ForbiddenError) as exc_info:
            await self.service.delete_form(mock_db_session, form.id, uuid.uuid4())

        assert "delete this form" in exc_info.value.message
        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_missing_form(self, mock_db_session, db_result):
        mock_db_session.execute.return_value = db_result(None)

        with pytest.raises(NotFoundError):
            await self.service.delete_form(mock_db_session, uuid.uuid4(), uuid.uuid4())


class TestListResponses:

    def setup_method(self):
        self.service = FormService()

    @pytest.mark.asyncio
    async def test_owner_sees_responses(self, mock_db_session, db_result):
        owner_id = uuid.uuid4()
        form = _make_form(owner_id)
        response = FormResponse(
            id=uuid.uuid4(),
            form_id=form.id,
            response_data={"Name": "Bob"},
            name="Bob",
            created_at=datetime.now(timezone.utc),
        )
        mock_db_session.execute = AsyncMock(
            side_effect=[db_result(form), db_result(rows=[response])]
        )

        result = await self.service.list_responses(mock_db_session, form.id, owner_id)

        assert len(result.responses) == 1
        assert result.responses[0].form_id == form.id
        assert result.responses[0].response_data == {"Name": "Bob"}

    @pytest.mark.asyncio
    async def test_other_account_forbidden(self, mock_db_session, db_result):
        form = _make_form()
        mock_db_session.execute.return_value = db_result(form)

        with pytest.raises(ForbiddenError) as exc_info:
            await self.service.list_responses(mock_db_session, form.id, uuid.uuid4())

        assert exc_info.value.message == (
            "You do not have permission to view the responses of this form"
        )
