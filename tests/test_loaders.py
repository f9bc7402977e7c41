"""Tests for plan loaders."""

import json
from fractions import Fraction

import pytest

from cashflow_rebalancer.config import StrategyName
from cashflow_rebalancer.errors import InvalidArgumentError, PlanFormatError
from cashflow_rebalancer.loaders import load_plan, load_plan_file, parse_allocation


class TestParseAllocation:
    def test_pairs(self):
        assert parse_allocation("VTI=900, BND=100") == {"VTI": "900", "BND": "100"}

    def test_newlines_and_whitespace(self):
        result = parse_allocation(" VTI = 0.6 \n BND=3/5 ,")
        assert result == {"VTI": "0.6", "BND": "3/5"}

    def test_percentages(self):
        result = parse_allocation("VTI=60%, BND=40%")
        assert result == {"VTI": Fraction(3, 5), "BND": Fraction(2, 5)}

    def test_keeps_order(self):
        assert list(parse_allocation("C=1,A=2,B=3")) == ["C", "A", "B"]

    @pytest.mark.parametrize("text", ["VTI", "=5", "VTI=", "VTI=1, BND"])
    def test_malformed(self, text):
        with pytest.raises(InvalidArgumentError, match="ASSET=AMOUNT"):
            parse_allocation(text)

    def test_duplicate_asset(self):
        with pytest.raises(InvalidArgumentError, match="more than once"):
            parse_allocation("VTI=1, VTI=2")

    def test_empty(self):
        with pytest.raises(InvalidArgumentError, match="No assets"):
            parse_allocation(" , ")


class TestLoadPlan:
    def test_full_plan(self):
        request = load_plan({
            "holdings": {"VTI": "9000", "BND": 1000},
            "target_allocation": {"VTI": "0.6", "BND": 0.4},
            "monthly_contribution": 500,
            "tolerance": "0.02",
            "strategy": "shortfall",
        })
        assert request.holdings == {"VTI": Fraction(9000), "BND": Fraction(1000)}
        assert request.target_allocation == {"VTI": Fraction(3, 5), "BND": Fraction(2, 5)}
        assert request.monthly_contribution == 500
        assert request.tolerance == Fraction(1, 50)
        assert request.strategy is StrategyName.SHORTFALL

    def test_optional_fields_default(self):
        request = load_plan({
            "holdings": {"VTI": 1},
            "target_allocation": {"VTI": 1},
            "monthly_contribution": 1,
        })
        assert request.tolerance is None
        assert request.strategy is StrategyName.GREEDY

    def test_missing_fields(self):
        with pytest.raises(PlanFormatError, match="monthly_contribution"):
            load_plan({"holdings": {}, "target_allocation": {}})

    def test_not_an_object(self):
        with pytest.raises(PlanFormatError, match="JSON object"):
            load_plan([1, 2])

    def test_holdings_not_a_mapping(self):
        with pytest.raises(PlanFormatError, match="'holdings'"):
            load_plan({
                "holdings": [1],
                "target_allocation": {},
                "monthly_contribution": 1,
            })

    def test_unknown_strategy(self):
        with pytest.raises(PlanFormatError, match="Unknown strategy"):
            load_plan({
                "holdings": {"VTI": 1},
                "target_allocation": {"VTI": 1},
                "monthly_contribution": 1,
                "strategy": "magic",
            })

    def test_bad_number(self):
        with pytest.raises(InvalidArgumentError):
            load_plan({
                "holdings": {"VTI": "lots"},
                "target_allocation": {"VTI": 1},
                "monthly_contribution": 1,
            })


class TestLoadPlanFile:
    def test_reads_json(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps({
            "holdings": {"A": 90, "B": 10},
            "target_allocation": {"A": "0.5", "B": "0.5"},
            "monthly_contribution": "100",
        }))

        request = load_plan_file(path)

        assert request.holdings == {"A": Fraction(90), "B": Fraction(10)}
        assert request.monthly_contribution == 100

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text("{not json")
        with pytest.raises(PlanFormatError, match="not valid JSON"):
            load_plan_file(path)

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_bytes(b'{"holdings": "\xff"}')
        with pytest.raises(PlanFormatError, match="not valid UTF-8"):
            load_plan_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_plan_file(tmp_path / "missing.json")
