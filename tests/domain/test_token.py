import json
from datetime import UTC, datetime, timedelta, timezone

import pytest

from kubetoken.domain.token import KubeToken, parse_timestamp
from kubetoken.exceptions import DecodeError
from tests.helpers import NOW, expiring_in, token_payload


class TestParseTimestamp:
    def test_parses_zulu_time(self) -> None:
        assert parse_timestamp("2026-10-18T12:00:00Z") == NOW

    def test_keeps_explicit_offset(self) -> None:
        parsed = parse_timestamp("2026-10-18T14:00:00+02:00")
        assert parsed.tzinfo == timezone(timedelta(hours=2))
        assert parsed == NOW

    def test_fractional_seconds(self) -> None:
        assert parse_timestamp("2026-10-18T12:00:00.500Z") == NOW + timedelta(milliseconds=500)

    @pytest.mark.parametrize(
        "raw",
        [None, "", 1760788800, "tomorrow", "2026-10-18", "20261018T120000", "2026-10-18T12:00:00", "2026-10-18 12:00:00Z"],
    )
    def test_rejects_invalid_values(self, raw: object) -> None:
        with pytest.raises(DecodeError):
            parse_timestamp(raw)


class TestKubeTokenFromPayload:
    def test_reads_expiration(self) -> None:
        token = KubeToken.from_payload(expiring_in(timedelta(hours=1)))
        assert token.expiration_timestamp == NOW + timedelta(hours=1)

    def test_preserves_unknown_fields(self) -> None:
        payload = token_payload(NOW, extraField={"nested": [1, 2]})
        token = KubeToken.from_payload(payload)
        assert token.payload["extraField"] == {"nested": [1, 2]}
        assert token.payload == payload

    def test_rejects_non_object(self) -> None:
        with pytest.raises(DecodeError, match="JSON object"):
            KubeToken.from_payload(["not", "a", "token"])

    def test_rejects_missing_status(self) -> None:
        with pytest.raises(DecodeError, match="status"):
            KubeToken.from_payload({"kind": "TokenRequest"})

    def test_rejects_missing_expiration(self) -> None:
        with pytest.raises(DecodeError):
            KubeToken.from_payload({"status": {"token": "abc"}})


class TestKubeTokenFromJson:
    def test_decodes_bytes(self) -> None:
        body = json.dumps(expiring_in(timedelta(minutes=5))).encode()
        token = KubeToken.from_json(body)
        assert token.payload["status"]["token"] == "eyJhbGciOi.token"

    def test_invalid_json_raises_decode_error(self) -> None:
        with pytest.raises(DecodeError, match="not valid JSON"):
            KubeToken.from_json(b"{not json")


class TestIsValidAt:
    def test_valid_before_expiration(self) -> None:
        token = KubeToken.from_payload(token_payload(NOW))
        assert token.is_valid_at(NOW - timedelta(seconds=1))

    def test_expired_at_exact_expiration(self) -> None:
        token = KubeToken.from_payload(token_payload(NOW))
        assert not token.is_valid_at(NOW)

    def test_expired_after_expiration(self) -> None:
        token = KubeToken.from_payload(token_payload(NOW))
        assert not token.is_valid_at(NOW + timedelta(seconds=1))

    def test_compares_across_timezones(self) -> None:
        token = KubeToken.from_payload(token_payload(NOW))
        assert token.is_valid_at(datetime(2026, 10, 18, 13, 59, 59, tzinfo=timezone(timedelta(hours=2))))
        assert not token.is_valid_at(datetime(2026, 10, 18, 12, 0, 0, tzinfo=UTC))
