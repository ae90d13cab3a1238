"""Tests for the auxData blob codec."""

import base64

import pytest

from reportdiff.aux_data import IssueAuxData, decode, encode
from reportdiff.errors import MalformedAuxDataError
from reportdiff.schemas import Location


class TestAuxDataCodec:
    """Test encoding and decoding of auxData blobs."""

    def test_decode_returns_end_locations_in_encoded_order(self) -> None:
        """End locations come back in the order they were encoded."""
        # Arrange
        ends = [Location(file="b.c", line=5), Location(file="a.c", line=2, column=4)]

        # Act
        decoded = decode(encode(ends))

        # Assert
        assert isinstance(decoded, IssueAuxData)
        assert decoded.end_locations == ends

    def test_opaque_members_are_preserved(self) -> None:
        """Access and trace info are carried through untouched."""
        encoded = encode(
            [Location(file="a.c", line=1)],
            access={"kind": "read"},
            trace_info=["x", 1],
        )

        decoded = decode(encoded)

        assert decoded.access == {"kind": "read"}
        assert decoded.trace_info == ["x", 1]

    def test_encode_is_deterministic(self) -> None:
        """Identical inputs produce identical blobs."""
        ends = [Location(file="a.c", line=1)]

        assert encode(ends, access={"b": 1, "a": 2}) == encode(
            ends, access={"a": 2, "b": 1}
        )

    def test_empty_end_locations_decode_to_empty_list(self) -> None:
        """A finding without endpoints still carries a valid blob."""
        assert decode(encode([])).end_locations == []


class TestMalformedAuxData:
    """Test that corrupt blobs abort decoding."""

    @pytest.mark.parametrize(
        "blob",
        [
            "%%% not base64 %%%",
            base64.b64encode(b"not json").decode(),
            base64.b64encode(b"[1, 2]").decode(),
            base64.b64encode(b'[null, null, [{"file": "a.c"}]]').decode(),
        ],
        ids=["invalid-base64", "invalid-json", "short-triple", "bad-location"],
    )
    def test_decode_raises_malformed_aux_data_error(self, blob: str) -> None:
        """Every decoding failure surfaces as MalformedAuxDataError."""
        with pytest.raises(MalformedAuxDataError, match="Cannot decode auxData"):
            decode(blob)
