"""Tests for directory/models.py — Advocate values and envelope validation."""

import dataclasses

import pytest

from directory.models import Advocate, MalformedResponseError, parse_envelope
from conftest import wire_record


class TestAdvocate:
    def test_from_dict(self):
        a = Advocate.from_dict(wire_record(specialties=["B", "A"]))
        assert a.id == "1"
        assert a.first_name == "Ann"
        assert a.specialties == ("B", "A")
        assert a.years_of_experience == 5
        assert a.phone_number == "5550000000"

    def test_integer_phone_is_stringified(self):
        assert Advocate.from_dict(wire_record(phoneNumber=5551234567)).phone_number == \
            "5551234567"

    def test_frozen(self):
        a = Advocate.from_dict(wire_record())
        with pytest.raises(dataclasses.FrozenInstanceError):
            a.city = "Elsewhere"

    def test_list_specialties_become_tuple(self):
        a = Advocate("1", "A", "B", "C", "D", ["x", "y"], 1, "1")
        assert a.specialties == ("x", "y")

    def test_full_name(self):
        assert Advocate.from_dict(wire_record()).full_name == "Ann Lee"

    def test_to_dict_uses_wire_keys(self):
        d = Advocate.from_dict(wire_record()).to_dict()
        assert d["firstName"] == "Ann"
        assert d["yearsOfExperience"] == 5
        assert d["specialties"] == ["Bipolar"]

    @pytest.mark.parametrize("key", ["firstName", "specialties", "yearsOfExperience"])
    def test_missing_field(self, key):
        rec = wire_record()
        del rec[key]
        with pytest.raises(MalformedResponseError, match=key):
            Advocate.from_dict(rec)

    @pytest.mark.parametrize("overrides", [
        {"specialties": "Bipolar"},
        {"specialties": [1, 2]},
        {"yearsOfExperience": -1},
        {"yearsOfExperience": "5"},
        {"yearsOfExperience": True},
        {"city": None},
        {"id": None},
    ])
    def test_wrong_types(self, overrides):
        with pytest.raises(MalformedResponseError):
            Advocate.from_dict(wire_record(**overrides))

    def test_not_an_object(self):
        with pytest.raises(MalformedResponseError):
            Advocate.from_dict(["Ann"])


class TestParseEnvelope:
    def test_valid(self):
        result = parse_envelope({"data": [wire_record(id=1), wire_record(id=2)]})
        assert [a.id for a in result] == ["1", "2"]

    def test_empty_list_is_valid(self):
        assert parse_envelope({"data": []}) == ()

    @pytest.mark.parametrize("payload", [
        [],
        None,
        "data",
        {"advocates": []},
        {"data": None},
        {"data": {"id": 1}},
    ])
    def test_rejects_other_shapes(self, payload):
        with pytest.raises(MalformedResponseError):
            parse_envelope(payload)

    def test_one_bad_record_rejects_batch(self):
        with pytest.raises(MalformedResponseError):
            parse_envelope({"data": [wire_record(), {"id": 2}]})

    def test_is_value_error(self):
        assert issubclass(MalformedResponseError, ValueError)
