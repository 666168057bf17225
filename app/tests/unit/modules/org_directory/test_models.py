import pytest
from pydantic import ValidationError

from modules.org_directory.models import DirectoryEntry, WorkUnit


def _entry(**overrides):
    values = dict(
        id="333333333333",
        name="gamma",
        status="SUSPENDED",
        email_address="gamma@example.com",
        ou_path=["r-root", "ou-a", "ou-b"],
        tags={"team": "data", "env": "prod"},
    )
    values.update(overrides)
    return DirectoryEntry(**values)


@pytest.mark.unit
class TestDirectoryEntry:
    def test_to_item_denormalizes_path_and_tags(self):
        item = _entry().to_item()

        assert item == {
            "id": "333333333333",
            "name": "gamma",
            "status": "SUSPENDED",
            "emailAddress": "gamma@example.com",
            "ouLevel1": "r-root",
            "ouLevel2": "ou-a",
            "ouLevel3": "ou-b",
            "flattenedTags": "env:prod,team:data",
        }

    def test_untagged_entry_omits_tag_attribute(self):
        item = _entry(tags={}).to_item()

        assert "flattenedTags" not in item

    def test_unused_levels_are_absent(self):
        item = _entry(ou_path=["r-root"]).to_item()

        assert "ouLevel2" not in item

    def test_from_item_round_trip(self):
        entry = _entry()

        assert DirectoryEntry.from_item(entry.to_item()) == entry

    def test_to_response_has_tag_mapping(self):
        response = _entry().to_response()

        assert response["tags"] == {"env": "prod", "team": "data"}
        assert "flattenedTags" not in response
        assert response["ouLevel3"] == "ou-b"

    def test_untagged_response_has_no_tags_key(self):
        response = _entry(tags={}).to_response()

        assert "tags" not in response
        assert "flattenedTags" not in response


@pytest.mark.unit
class TestWorkUnit:
    def test_message_body_wire_format(self):
        assert WorkUnit(entry_id="111111111111").to_message_body() == '{"AccountId":"111111111111"}'

    def test_from_message_keeps_delivery_metadata(self):
        unit = WorkUnit.from_message(
            '{"AccountId": "111111111111"}', message_id="m-1", receipt_handle="rh-1"
        )

        assert unit.entry_id == "111111111111"
        assert unit.message_id == "m-1"
        assert unit.receipt_handle == "rh-1"
        assert unit.to_message_body() == '{"AccountId":"111111111111"}'

    @pytest.mark.parametrize("body", ["not json", "{}", '{"AccountId": ""}'])
    def test_malformed_bodies_are_rejected(self, body):
        with pytest.raises(ValidationError):
            WorkUnit.from_message(body)
