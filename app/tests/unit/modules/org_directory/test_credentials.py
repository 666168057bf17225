import pytest

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus
from modules.org_directory.credentials import CredentialBroker
from modules.org_directory.errors import AuthorizationError, SourceApiError
from tests.fixtures.org_directory import FakeSts

ROLE_ARN = "arn:aws:iam::999999999999:role/OrgMetadataReader"


@pytest.mark.unit
class TestCredentialBroker:
    def test_obtain_assumes_role_with_external_id(self):
        sts = FakeSts()

        credentials = CredentialBroker(sts, ROLE_ARN, "id-02bd6988d8d3").obtain()

        assert credentials.access_key_id == "ASIAFAKE1"
        assert sts.calls == [
            {
                "role_arn": ROLE_ARN,
                "session_name": "AWSOrgMetadataRole",
                "external_id": "id-02bd6988d8d3",
            }
        ]

    def test_every_call_assumes_again(self):
        sts = FakeSts()
        broker = CredentialBroker(sts, ROLE_ARN, "id-02bd6988d8d3")

        first = broker.obtain()
        second = broker.obtain()

        assert len(sts.calls) == 2
        assert first != second

    def test_rejected_external_id_raises_authorization_error(self):
        sts = FakeSts(
            OperationResult.error(OperationStatus.UNAUTHORIZED, "AccessDenied", error_code="AccessDenied")
        )

        with pytest.raises(AuthorizationError):
            CredentialBroker(sts, ROLE_ARN, "id-000000000000").obtain()

    def test_other_failures_raise_source_api_error(self):
        failure = OperationResult.transient_error("throttled", error_code="Throttling")
        sts = FakeSts(failure)

        with pytest.raises(SourceApiError) as exc_info:
            CredentialBroker(sts, ROLE_ARN, "id-02bd6988d8d3").obtain()

        assert exc_info.value.response is failure
