"""Tests for standard thickness resolution."""
import pytest

from cutlist.catalog import (
    STOCK_CATALOGS,
    ThicknessResolution,
    parse_std_thicknesses,
    resolve_standard_thickness,
)
from cutlist.units import INCH_TO_MM

CATALOG = (4.0, 6.0, 10.0, 18.0)


class TestResolveStandardThickness:

    def test_rounds_up_to_next_catalog_value(self):
        assert resolve_standard_thickness(5.0, CATALOG) == ThicknessResolution(6.0, True)

    def test_exact_match_is_kept(self):
        assert resolve_standard_thickness(10.0, CATALOG) == ThicknessResolution(10.0, True)

    def test_thinner_than_catalog_uses_first_entry(self):
        assert resolve_standard_thickness(0.5, CATALOG) == ThicknessResolution(4.0, True)

    def test_thicker_than_catalog_is_unavailable(self):
        assert resolve_standard_thickness(25.0, CATALOG) == ThicknessResolution(25.0, False)

    def test_empty_catalog_is_unavailable(self):
        assert resolve_standard_thickness(3.0, ()) == ThicknessResolution(3.0, False)

    def test_monotonic_and_never_rounds_down(self):
        previous = 0.0
        thicknesses = [t / 4.0 for t in range(1, 100)]
        for thickness in thicknesses:
            resolved = resolve_standard_thickness(thickness, CATALOG)
            assert resolved.value >= previous
            assert resolved.value >= thickness
            if resolved.available:
                assert resolved.value in CATALOG
            else:
                assert resolved.value == thickness
            previous = resolved.value

    def test_tolerance_absorbs_noise_above_an_entry(self):
        resolved = resolve_standard_thickness(12.0000001, (12.0, 15.0), tolerance=0.0254)
        assert resolved == ThicknessResolution(12.0, True)

    def test_tolerance_does_not_swallow_real_differences(self):
        resolved = resolve_standard_thickness(12.1, (12.0, 15.0), tolerance=0.0254)
        assert resolved == ThicknessResolution(15.0, True)


class TestParseStdThicknesses:

    def test_parses_semicolon_list(self):
        assert parse_std_thicknesses("4;6;10") == (4.0, 6.0, 10.0)

    def test_converts_into_scene_unit(self):
        assert parse_std_thicknesses("18;25.4", unit="in") == pytest.approx(
            (18.0 / INCH_TO_MM, 1.0)
        )

    def test_ignores_blanks_and_mm_suffix(self):
        assert parse_std_thicknesses(" 4mm ; ;6 ;") == (4.0, 6.0)

    def test_accepts_decimal_comma(self):
        assert parse_std_thicknesses("2,5;5") == (2.5, 5.0)

    def test_empty_string_is_empty_catalog(self):
        assert parse_std_thicknesses("") == ()

    def test_rejects_garbage(self):
        with pytest.raises(ValueError, match="Invalid standard thickness"):
            parse_std_thicknesses("4;six")

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError):
            parse_std_thicknesses("4;-6")


class TestStockCatalogs:

    def test_presets_are_ascending(self):
        for key, stock in STOCK_CATALOGS.items():
            values = stock.thicknesses_mm
            assert list(values) == sorted(values), key

    def test_thicknesses_in_unit(self):
        plywood = STOCK_CATALOGS["plywood_baltic_birch"]
        assert plywood.thicknesses_in("in") == pytest.approx(plywood.thicknesses_inch)
        assert plywood.thicknesses_mm[-1] == pytest.approx(0.75 * INCH_TO_MM)
