"""
Tests for AI specifications and the AI registry.
"""

import json
from datetime import date

import pytest

from gs1_decoder import (
    AIRegistry,
    AISpec,
    CharacterSet,
    Decoder,
    ErrorCode,
    Fixed,
    RegistryBuilder,
    ValueDecodeError,
    Variable,
    default_registry,
)


@pytest.fixture(scope="module")
def registry():
    return default_registry()


class TestDefaultTable:
    """Tests for the default AI table."""

    def test_common_ais_present(self, registry):
        for code in ["00", "01", "02", "10", "11", "17", "21", "30", "37", "410", "7006"]:
            assert code in registry, f"AI {code} missing"

    def test_measure_families_expanded(self, registry):
        """310n expands to 3100-3105 and stops there."""
        for n in range(6):
            assert f"310{n}" in registry
            assert f"320{n}" in registry
            assert f"369{n}" in registry
        assert "3106" not in registry
        assert "3109" not in registry

    def test_internal_ais_not_registered(self, registry):
        for code in ["90", "91", "95", "99"]:
            assert registry.find(code) is None

    def test_gtin_entry(self, registry):
        spec = registry.find("01")
        assert spec.length == Fixed(14)
        assert spec.charset is CharacterSet.NUMERIC
        assert spec.check_digit
        assert spec.decoder is Decoder.IDENTITY
        assert spec.title == "GTIN"

    def test_batch_entry(self, registry):
        spec = registry.find("10")
        assert spec.length == Variable(20)
        assert spec.charset is CharacterSet.ALPHANUMERIC
        assert not spec.check_digit
        assert spec.title == "BATCH/LOT"

    def test_date_and_count_entries(self, registry):
        assert registry.find("17").decoder is Decoder.DATE
        assert registry.find("7006").decoder is Decoder.DATE
        assert registry.find("30").decoder is Decoder.INTEGER
        assert registry.find("37").decoder is Decoder.INTEGER
        assert registry.find("3102").decoder is Decoder.VARIABLE_MEASURE

    def test_gln_entries_have_check_digit(self, registry):
        for code in ["410", "411", "412", "413", "414", "415", "416", "417"]:
            spec = registry.find(code)
            assert spec.length == Fixed(13)
            assert spec.check_digit

    def test_fresh_registry_per_call(self):
        assert default_registry() is not default_registry()
        assert default_registry().codes() == default_registry().codes()

    def test_repr(self, registry):
        assert repr(registry) == f"AIRegistry({len(registry)} AIs)"


class TestRegistryImmutability:

    def test_all_entries_is_a_copy(self, registry):
        entries = registry.all_entries()
        del entries["01"]
        assert "01" in registry

    def test_no_attribute_assignment(self, registry):
        with pytest.raises(AttributeError):
            registry.extra = {}

    def test_key_must_match_ai(self):
        with pytest.raises(ValueError):
            AIRegistry({"10": AISpec("21", Variable(20))})


class TestRegistryBuilder:
    """Tests for registry customization."""

    def test_defaults_by_default(self):
        assert len(RegistryBuilder().build()) == len(default_registry())

    def test_register_custom_ai(self):
        registry = (RegistryBuilder()
                    .register(AISpec("99", Variable(10), CharacterSet.ANY, title="INTERNAL"))
                    .build())
        assert "99" in registry
        assert "01" in registry
        assert registry.find("99").title == "INTERNAL"

    def test_override_wins(self):
        registry = RegistryBuilder().register(AISpec("10", Variable(5))).build()
        assert registry.find("10").max_length == 5

    def test_without_defaults(self):
        registry = (RegistryBuilder()
                    .without_defaults()
                    .register_all([
                        AISpec("01", Fixed(14), CharacterSet.NUMERIC, check_digit=True),
                        AISpec("21", Variable(20)),
                    ])
                    .build())
        assert registry.codes() == ["01", "21"]

    def test_with_defaults_restores_table(self):
        registry = RegistryBuilder().without_defaults().with_defaults().build()
        assert "17" in registry

    def test_built_registries_are_independent(self):
        builder = RegistryBuilder().without_defaults()
        first = builder.build()
        builder.register(AISpec("99", Variable(10)))
        assert "99" not in first
        assert "99" in builder.build()


class TestRegistryJson:

    def test_json_export_shape(self, registry):
        data = json.loads(registry.to_json())
        assert data["01"] == {
            "ai": "01",
            "title": "GTIN",
            "fixed_length": 14,
            "max_length": None,
            "charset": "N",
            "check_digit": True,
            "decoder": "identity",
        }
        assert data["10"]["fixed_length"] is None
        assert data["10"]["max_length"] == 20

    def test_json_reload_preserves_entries(self, registry):
        reloaded = AIRegistry.from_json(registry.to_json())
        assert reloaded.all_entries() == registry.all_entries()

    def test_json_reload_unbounded_variable(self):
        registry = AIRegistry({"99": AISpec("99", Variable(), CharacterSet.ANY)})
        reloaded = AIRegistry.from_json(registry.to_json())
        assert reloaded.find("99").length == Variable(None)
        assert reloaded.find("99").max_length is None


class TestAISpec:
    """Tests for AISpec construction and the value contract."""

    @pytest.mark.parametrize("code", ["1", "12345", "AB", "1A", ""])
    def test_invalid_codes(self, code):
        with pytest.raises(ValueError):
            AISpec(code, Variable(20))

    def test_invalid_lengths(self):
        with pytest.raises(ValueError):
            Fixed(0)
        with pytest.raises(ValueError):
            Variable(0)

    def test_measure_places_bounded(self):
        with pytest.raises(ValueError):
            AISpec("3106", Fixed(6), CharacterSet.NUMERIC, decoder=Decoder.VARIABLE_MEASURE)

    def test_length_properties(self):
        fixed = AISpec("01", Fixed(14), CharacterSet.NUMERIC)
        assert fixed.is_fixed
        assert fixed.fixed_length == 14
        assert fixed.max_length == 14

        variable = AISpec("10", Variable(20))
        assert not variable.is_fixed
        assert variable.fixed_length is None
        assert variable.max_length == 20

    def test_decode_identity(self):
        assert AISpec("10", Variable(20)).decode("ABC123") == "ABC123"

    def test_fixed_length_enforced_in_both_modes(self):
        spec = AISpec("01", Fixed(14), CharacterSet.NUMERIC)
        for strict in (False, True):
            with pytest.raises(ValueDecodeError) as exc_info:
                spec.decode("123", strict=strict)
            assert exc_info.value.code == ErrorCode.LENGTH_MISMATCH
            assert "Expected length 14" in exc_info.value.message

    def test_max_length_strict_only(self):
        spec = AISpec("10", Variable(5))
        assert spec.decode("ABCDEF") == "ABCDEF"
        with pytest.raises(ValueDecodeError) as exc_info:
            spec.decode("ABCDEF", strict=True)
        assert exc_info.value.code == ErrorCode.LENGTH_EXCEEDED

    def test_check_digit_strict_only(self):
        spec = AISpec("01", Fixed(14), CharacterSet.NUMERIC, check_digit=True)
        assert spec.decode("09501101530004") == "09501101530004"
        with pytest.raises(ValueDecodeError) as exc_info:
            spec.decode("09501101530004", strict=True)
        assert exc_info.value.code == ErrorCode.CHECK_DIGIT_INVALID

    def test_charset_checked_before_check_digit(self):
        spec = AISpec("01", Fixed(14), CharacterSet.NUMERIC, check_digit=True)
        with pytest.raises(ValueDecodeError) as exc_info:
            spec.decode("0950110153000A", strict=True)
        assert exc_info.value.code == ErrorCode.CHARACTER_SET_VIOLATION

    def test_any_charset(self):
        spec = AISpec("99", Variable(), CharacterSet.ANY)
        assert spec.decode("lower~case\x00") == "lower~case\x00"

    def test_decoders(self):
        assert AISpec("17", Fixed(6), CharacterSet.NUMERIC,
                      decoder=Decoder.DATE).decode("251231") == date(2025, 12, 31)
        assert AISpec("37", Variable(8), CharacterSet.NUMERIC,
                      decoder=Decoder.INTEGER).decode("0050") == 50
        assert AISpec("3102", Fixed(6), CharacterSet.NUMERIC,
                      decoder=Decoder.VARIABLE_MEASURE).decode("001250") == "12.50"
