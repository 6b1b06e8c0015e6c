# tests/test_templates.py
import pytest

from funnel_roi.models.io import FunnelTemplate, FunnelInputs
from funnel_roi.templates.registry import load_template, available_templates

def test_shipped_templates():
    assert {"full", "no_proposal", "direct"} <= set(available_templates())
    t = load_template("full")
    assert t.stages[0] == "landing_page_conversion" and t.stages[-1] == "client_won_rate"
    assert len(t.stages) == 5
    assert t.defaults.cost_per_click == 4

def test_missing_template():
    with pytest.raises(FileNotFoundError):
        load_template("does_not_exist")

@pytest.mark.parametrize("stages", [
    ["landing_page_conversion", "client_won_rate"],
    ["discovery_call_rate", "sales_call_rate", "client_won_rate"],
    ["landing_page_conversion", "sales_call_rate", "proposal_rate"],
    ["landing_page_conversion", "bounce_rate", "client_won_rate"],
    ["landing_page_conversion", "sales_call_rate", "sales_call_rate", "client_won_rate"],
])
def test_bad_stage_lists_rejected(stages):
    with pytest.raises(ValueError):
        FunnelTemplate(name="x", label="x", stages=stages, defaults=FunnelInputs())

def test_custom_template_directory(tmp_path):
    (tmp_path / "webinar.yaml").write_text(
        "name: webinar\n"
        "label: Webinar\n"
        "stages: [landing_page_conversion, sales_call_rate, client_won_rate]\n"
        "defaults: {costPerClick: 1.5, landingPageConversion: 10}\n",
        encoding="utf-8",
    )
    t = load_template("webinar", root=tmp_path)
    assert t.defaults.cost_per_click == 1.5
    assert available_templates(tmp_path) == ["webinar"]
