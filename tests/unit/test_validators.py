import pytest

from docbot.validators import (
    ApostilleInput,
    NosudInput,
    parse_apostille,
    parse_nosud,
    validate_apostille,
    validate_nosud,
)


class TestValidateNosud:
    @pytest.mark.parametrize(
        "text",
        [
            "IVANOV, IVAN, IVANOVICH, 15.05.1990, 12345678901234",
            "MARDIYEV,XUSEN,MANSUROVICH,27.03.2000,30109986180092",
            "  A , B , C , 01.01.1900 , 00000000000000  ",
            # календарь не проверяется
            "A, B, C, 31.02.2001, 12345678901234",
        ],
    )
    def test_accepts_valid(self, text: str) -> None:
        assert validate_nosud(text) is True

    @pytest.mark.parametrize(
        "text",
        [
            "IVANOV, IVAN, IVANOVICH, 15/05/1990, 12345678901234",
            "IVANOV, IVAN, IVANOVICH, 15.13.1990, 12345678901234",
            "IVANOV, IVAN, IVANOVICH, 00.05.1990, 12345678901234",
            "IVANOV, IVAN, IVANOVICH, 32.05.1990, 12345678901234",
            "IVANOV, IVAN, IVANOVICH, 15.05.2190, 12345678901234",
            "IVANOV, IVAN, IVANOVICH, 5.5.1990, 12345678901234",
            "IVANOV, IVAN, IVANOVICH, 15.05.1990, 1234567890123",
            "IVANOV, IVAN, IVANOVICH, 15.05.1990, 123456789012345",
            "IVANOV, IVAN, IVANOVICH, 15.05.1990, 1234567890123a",
            "IVANOV, IVAN, 15.05.1990, 12345678901234",
            "IVANOV, IVAN, IVANOVICH, 15.05.1990, 12345678901234, EXTRA",
            "IVANOV, , IVANOVICH, 15.05.1990, 12345678901234",
            "",
            "hello",
        ],
    )
    def test_rejects_invalid(self, text: str) -> None:
        assert validate_nosud(text) is False

    @pytest.mark.parametrize(
        "text",
        [
            "IVANOV, IVAN, IVANOVICH, 15.05.1990, 12345678901234,",
            "IVANOV, IVAN,, IVANOVICH, 15.05.1990, 12345678901234",
            ", IVANOV, IVAN, IVANOVICH, 15.05.1990, 12345678901234 , ,",
        ],
    )
    def test_ignores_stray_commas(self, text: str) -> None:
        assert validate_nosud(text) is True

    def test_rejects_non_ascii_digits(self) -> None:
        assert validate_nosud("A, B, C, 15.05.1990, ١٢٣٤٥٦٧٨٩٠١٢٣٤") is False


class TestParseNosud:
    def test_fields_in_order_trimmed(self) -> None:
        parsed = parse_nosud("  IVANOV ,IVAN,  IVANOVICH , 15.05.1990,12345678901234 ")
        assert parsed == NosudInput(
            last_name="IVANOV",
            first_name="IVAN",
            middle_name="IVANOVICH",
            birth_date="15.05.1990",
            pinfl="12345678901234",
        )

    def test_stray_commas_keep_fields_aligned(self) -> None:
        parsed = parse_nosud("IVANOV, IVAN,, IVANOVICH, 15.05.1990, 12345678901234,")
        assert parsed.middle_name == "IVANOVICH"
        assert parsed.birth_date == "15.05.1990"
        assert parsed.pinfl == "12345678901234"


class TestValidateApostille:
    def test_accepts_name_and_org(self) -> None:
        assert validate_apostille("Ulmasov Bakhtiyor Abrorovich, CENTER OF PUBLIC SERVICES") is True

    @pytest.mark.parametrize(
        "text",
        [
            "Ulmasov Bakhtiyor, CENTER OF PUBLIC SERVICES,",
            "Ulmasov Bakhtiyor,, CENTER OF PUBLIC SERVICES",
        ],
    )
    def test_ignores_stray_commas(self, text: str) -> None:
        assert validate_apostille(text) is True

    def test_requires_space_in_name(self) -> None:
        assert validate_apostille("Ulmasov, CENTER OF PUBLIC SERVICES") is False

    @pytest.mark.parametrize(
        "text",
        [
            "Ulmasov Bakhtiyor",
            "Ulmasov Bakhtiyor, ",
            "Ulmasov Bakhtiyor, ORG, EXTRA",
            "",
        ],
    )
    def test_rejects_wrong_shape(self, text: str) -> None:
        assert validate_apostille(text) is False


class TestParseApostille:
    def test_fields(self) -> None:
        parsed = parse_apostille(" Ulmasov Bakhtiyor , CENTER ")
        assert parsed == ApostilleInput(full_name="Ulmasov Bakhtiyor", organization="CENTER")

    def test_trailing_comma(self) -> None:
        parsed = parse_apostille("Ulmasov Bakhtiyor, CENTER,")
        assert parsed == ApostilleInput(full_name="Ulmasov Bakhtiyor", organization="CENTER")
