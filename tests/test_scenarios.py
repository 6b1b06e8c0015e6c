# tests/test_scenarios.py
import pytest

from funnel_roi.models.io import FunnelInputs, ProjectionOptions
from funnel_roi.services.scenarios import ScenarioBook
from funnel_roi.templates.registry import load_template

def _book(n=2):
    book = ScenarioBook()
    for _ in range(n):
        book.add()
    return book

def test_add_uses_template_defaults_and_names():
    book = _book()
    assert [s.name for s in book] == ["Scenario 1", "Scenario 2"]
    sc = book.get(0)
    assert sc.inputs == load_template("full").defaults
    assert sc.metrics is not None and sc.errors.ok

def test_add_clamps_client_spend_to_ceiling():
    sc = ScenarioBook().add(inputs=FunnelInputs(avg_lifetime_value=900, cost_per_click=1, client_spend=500))
    assert sc.inputs.client_spend == pytest.approx(300)

def test_edit_recomputes_only_that_scenario():
    book = _book()
    before = book.get(1).metrics
    sc = book.edit(0, "monthly_marketing_budget", 4000)
    assert sc.metrics.clicks == pytest.approx(1000)
    assert book.get(1).metrics == before

def test_invalid_edit_keeps_last_good_metrics():
    book = _book(1)
    good = book.get(0).metrics
    sc = book.edit(0, "cost_per_click", 0)
    assert not sc.errors.ok
    assert sc.errors.for_field("costPerClick")
    assert sc.inputs.cost_per_click == 0
    assert sc.metrics == good
    sc = book.edit(0, "cost_per_click", 2)
    assert sc.errors.ok and sc.metrics.clicks == pytest.approx(1000)

def test_edit_ltv_clamps_through_book():
    book = _book(1)
    sc = book.edit(0, "avg_lifetime_value", 900)
    assert sc.inputs.client_spend == pytest.approx(300)

def test_reset_sets_client_spend_to_ceiling():
    book = _book(1)
    book.edit(0, "landing_page_conversion", 20)
    sc = book.reset(0)
    assert sc.inputs.landing_page_conversion == 5
    assert sc.inputs.client_spend == pytest.approx(2000 / 3)
    assert sc.name == "Scenario 1"

def test_rename_and_remove():
    book = _book(3)
    book.rename(1, "Aggressive")
    removed = book.remove(0)
    assert removed.name == "Scenario 1"
    assert [s.name for s in book] == ["Aggressive", "Scenario 3"]
    with pytest.raises(IndexError):
        book.get(5)

def test_to_frame_one_row_per_scenario():
    book = _book(2)
    book.rename(1, "Cheap clicks")
    book.edit(1, "cost_per_click", 2)
    df = book.to_frame()
    assert list(df.index) == ["Scenario 1", "Cheap clicks"]
    assert df.loc["Cheap clicks", "clicks"] == pytest.approx(2 * df.loc["Scenario 1", "clicks"])
    assert bool(df["valid"].all())

def test_empty_frame():
    assert ScenarioBook().to_frame().empty

def test_book_with_options_and_other_template():
    book = ScenarioBook(template=load_template("direct"),
                        options=ProjectionOptions(include_management_fee_in_spend=True))
    sc = book.add()
    assert sc.metrics.sales_calls is None
    # direct defaults: 1500 budget + 500 fee
    assert sc.metrics.cost_per_acquisition == pytest.approx(2000 / sc.metrics.new_clients)

def test_rejected_ltv_edit_leaves_client_spend_alone():
    book = _book(1)
    assert book.get(0).inputs.client_spend == pytest.approx(500)
    sc = book.edit(0, "avg_lifetime_value", -3000)
    assert not sc.errors.ok
    assert sc.inputs.client_spend == pytest.approx(500)
    sc = book.edit(0, "avg_lifetime_value", 2000)
    assert sc.errors.ok
    assert sc.inputs.client_spend == pytest.approx(500)

def test_replace_inputs_swaps_whole_record_without_clamp():
    book = _book(2)
    other = book.get(1)
    x = FunnelInputs(avg_lifetime_value=900, monthly_marketing_budget=1000, cost_per_click=1,
                     landing_page_conversion=10, discovery_call_rate=50, sales_call_rate=50,
                     proposal_rate=50, client_won_rate=50, client_spend=500)
    sc = book.replace_inputs(0, x)
    assert sc.inputs == x and sc.inputs.client_spend == 500
    assert sc.errors.ok and sc.metrics.clicks == pytest.approx(1000)
    assert book.get(1) == other
    good = sc.metrics
    sc = book.replace_inputs(0, x.model_copy(update={"cost_per_click": 0}))
    assert not sc.errors.ok and sc.metrics == good
