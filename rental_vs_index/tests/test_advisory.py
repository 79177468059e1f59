from rental_vs_index.core.advisory import (
    INPUT_BOUNDS,
    apply_overrides,
    build_insights_prompt,
    parse_defaults_response,
    split_overrides,
)
from rental_vs_index.core.model import SimulationParams, calculate_simulation


def test_parse_fenced_json():
    text = '```json\n{"purchasePrice": 680000, "mortgageRate": 4.5, "sp500Return": 8.5, "note": "x"}\n```'
    assert parse_defaults_response(text) == {
        "purchase_price": 680000,
        "mortgage_rate": 4.5,
        "index_return": 8.5,
    }


def test_parse_drops_non_numeric_values():
    assert parse_defaults_response('{"monthlyRent": "2800", "vacancyRate": true}') == {}


def test_parse_rejects_garbage():
    assert parse_defaults_response("Sure! Here are some numbers.") is None
    assert parse_defaults_response("[1, 2]") is None
    assert parse_defaults_response(None) == {}


def test_apply_overrides():
    params = apply_overrides(SimulationParams(), {"monthly_rent": 2_800, "amortization_years": 30.0, "bogus": 1})
    assert params.monthly_rent == 2_800.0
    assert params.amortization_years == 30
    assert apply_overrides(params, None) is params


def test_prompt_mentions_results():
    params = SimulationParams()
    result = calculate_simulation(params)
    prompt = build_insights_prompt(params, result)
    assert "$750,000" in prompt
    assert "Year 25" in prompt


def test_out_of_range_overrides_are_split_off():
    overrides = parse_defaults_response('{"amortizationYears": 0, "vacancyRate": 150, "monthlyRent": 2900}')
    kept, dropped = split_overrides(overrides)
    assert kept == {"monthly_rent": 2900}
    assert dropped == {"amortization_years": 0, "vacancy_rate": 150}
    params = apply_overrides(SimulationParams(), kept)
    assert params.amortization_years == 25
    assert params.vacancy_rate == 5.0


def test_input_bounds_cover_every_field():
    assert set(INPUT_BOUNDS) == set(SimulationParams.field_names())
    kept, dropped = split_overrides({"purchase_price": 5_000_000, "mortgage_rate": -1})
    assert kept == {"purchase_price": 5_000_000}
    assert dropped == {"mortgage_rate": -1}
