"""
Test the year-by-year projection engine.
"""

import pytest
from pydantic import ValidationError
from models import Profile
from projection.engine import ProjectionEngine, amortize_debt, generate_projections, run_projection
from projection.heuristics import estimate_social_security, estimate_taxes


def _by_age(projections):
    return {p.age: p for p in projections}


class TestPhases:
    """Test the working / bridge / drawing state machine."""

    def test_age_range(self, fers_profile, as_of):
        projections = generate_projections(fers_profile, as_of)

        assert projections[0].age == 56
        assert projections[0].year == 2026
        assert projections[-1].age == 85
        assert len(projections) == 30

    def test_phase_transitions(self, fers_profile, as_of):
        rows = _by_age(generate_projections(fers_profile, as_of))

        assert [rows[a].phase for a in (56, 59)] == ["working", "working"]
        assert [rows[a].phase for a in (60, 61)] == ["bridge", "bridge"]
        assert [rows[a].phase for a in (62, 85)] == ["drawing", "drawing"]

    def test_leave_age_defaults_to_earliest_eligibility(self, make_profile, as_of):
        """Without leave or claim ages the earliest eligible age (62) is used for both."""
        profile = make_profile(retirement={"leave_service_age": None, "claim_pension_age": None})
        engine = ProjectionEngine(profile, as_of)

        assert engine.leave_age == 62
        assert engine.claim_age == 62

    def test_claim_age_defaults_to_leave_age(self, make_profile, as_of):
        profile = make_profile(retirement={"leave_service_age": 58, "claim_pension_age": None})
        engine = ProjectionEngine(profile, as_of)

        assert engine.claim_age == 58
        assert engine.phase_for(57) == "working"
        assert engine.phase_for(58) == "drawing"

    def test_default_life_expectancy(self, make_profile, as_of):
        profile = make_profile(personal={"birth_year": 1970, "life_expectancy": None})
        assert generate_projections(profile, as_of)[-1].age == 85

    def test_life_expectancy_before_current_age(self, make_profile, as_of):
        profile = make_profile(personal={"birth_year": 1970, "life_expectancy": 50})
        assert generate_projections(profile, as_of) == []


class TestIncomeStreams:
    """Test pension, Social Security, spouse and bridge income."""

    def test_pension_starts_at_claim_age_with_cola(self, fers_profile, as_of):
        engine = ProjectionEngine(fers_profile, as_of)
        rows = _by_age(engine.run())
        base = engine.pension_breakdown().annual_pension

        assert base > 0
        assert rows[61].pension == 0.0
        assert rows[62].pension == pytest.approx(base)
        assert rows[63].pension == pytest.approx(base * 1.02)

    def test_social_security_from_67(self, fers_profile, as_of):
        rows = _by_age(generate_projections(fers_profile, as_of))

        assert rows[66].social_security == 0.0
        assert rows[67].social_security == pytest.approx(120000 * 0.30)

    def test_spouse_switches_at_own_retirement_age(self, household_profile, as_of):
        """Spouse is 58 when the primary is 56, so they reach 65 at primary age 63."""
        rows = _by_age(generate_projections(household_profile, as_of))

        assert rows[56].spouse_income == 70000
        assert rows[62].spouse_income == 70000
        assert rows[63].spouse_income == 25000

    def test_bridge_window_inclusive(self, household_profile, as_of):
        rows = _by_age(generate_projections(household_profile, as_of))

        assert rows[60].other_income == 0.0
        assert [rows[a].other_income for a in (61, 62, 63)] == [30000, 30000, 30000]
        assert rows[64].other_income == 0.0

    def test_incomplete_bridge_disabled(self, make_profile, as_of):
        profile = make_profile(retirement={"bridge": {"enabled": True, "start_age": 60, "end_age": 65}})
        assert all(p.other_income == 0.0 for p in generate_projections(profile, as_of))

    def test_disabled_bridge(self, make_profile, as_of):
        profile = make_profile(retirement={
            "bridge": {"enabled": False, "annual_income": 30000, "start_age": 60, "end_age": 65},
        })
        assert all(p.other_income == 0.0 for p in generate_projections(profile, as_of))


class TestTSP:
    """Test the TSP path inside the projection."""

    def test_first_working_year(self, fers_profile, as_of):
        first = generate_projections(fers_profile, as_of)[0]

        assert first.tsp_distribution == 0.0
        assert first.tsp_balance == pytest.approx((400000 + 20000) * 1.06)

    def test_drawdown_after_leaving(self, fers_profile, as_of):
        rows = _by_age(generate_projections(fers_profile, as_of))
        start = rows[59].tsp_balance

        assert rows[60].tsp_distribution == pytest.approx(start * 0.04)
        assert rows[60].tsp_balance == pytest.approx(start * 0.96 * 1.06)

    def test_default_drawdown_rate(self, make_profile, as_of):
        profile = make_profile(assumptions={"tsp_drawdown_rate": None})
        rows = _by_age(generate_projections(profile, as_of))

        assert rows[60].tsp_distribution == pytest.approx(rows[59].tsp_balance * 0.04)

    def test_employer_match_added_while_working(self, make_profile, as_of):
        profile = make_profile(tsp={"employee_contribution_percent": 0.05})
        first = generate_projections(profile, as_of)[0]

        assert first.tsp_balance == pytest.approx((400000 + 20000 + 6000) * 1.06)


class TestExpenses:
    """Test FEHB, living expenses, college, life events and debts."""

    def test_fehb_only_after_leaving(self, fers_profile, as_of):
        rows = _by_age(generate_projections(fers_profile, as_of))

        assert rows[59].fehb_cost == 0.0
        assert rows[60].fehb_cost == pytest.approx(9600)
        assert rows[61].fehb_cost == pytest.approx(9600 * 1.05)

    def test_living_expenses_once_retired(self, household_profile, as_of):
        rows = _by_age(generate_projections(household_profile, as_of))

        assert rows[59].living_expenses == 0.0
        assert rows[60].living_expenses == pytest.approx(60000 * 1.03 ** 4)

    def test_college_window(self, household_profile, as_of):
        """Child born 2010 is in college 2028-2031, primary ages 58-61."""
        rows = _by_age(generate_projections(household_profile, as_of))

        assert rows[57].college_costs == 0.0
        assert [rows[a].college_costs for a in (58, 59, 60, 61)] == [25000] * 4
        assert rows[62].college_costs == 0.0

    def test_life_events(self, household_profile, as_of):
        rows = _by_age(generate_projections(household_profile, as_of))

        assert rows[58].life_event_costs == 18000
        assert rows[59].life_event_costs == 0.0
        assert [rows[a].life_event_costs for a in (60, 61, 62)] == [5000] * 3
        assert rows[63].life_event_costs == 0.0

    def test_debt_amortization(self, household_profile, as_of):
        projections = generate_projections(household_profile, as_of)
        first = projections[0]

        assert first.debt_payments == pytest.approx(12 * 1700)
        assert first.total_debt == pytest.approx(150000 * 1.04 - 12 * 1700)
        assert all(p.total_debt >= 0 for p in projections)
        assert projections[-1].total_debt == 0.0
        assert projections[-1].debt_payments == 0.0

    def test_amortize_final_payment_capped(self):
        balance, paid = amortize_debt(1000, 0.10, 5000)
        assert balance == 0.0
        assert paid == pytest.approx(1100)

    def test_amortize_paid_off(self):
        assert amortize_debt(0.0, 0.05, 1000) == (0.0, 0.0)

    def test_expenses_add_up(self, household_profile, as_of):
        for p in generate_projections(household_profile, as_of):
            expected = p.fehb_cost + p.living_expenses + p.college_costs + p.life_event_costs + p.debt_payments
            assert p.expenses == pytest.approx(expected)


class TestBalancesAndNetWorth:
    """Test other accounts, assets and the net-worth identity."""

    def test_other_accounts_blended_growth(self, household_profile, as_of):
        """Blended rate is (100k x 7% + 50k x 4%) / 150k = 6%."""
        first = generate_projections(household_profile, as_of)[0]
        assert first.other_investments_balance == pytest.approx((150000 + 5000) * 1.06)

    def test_assets_appreciate(self, household_profile, as_of):
        first = generate_projections(household_profile, as_of)[0]
        assert first.total_assets == pytest.approx(450000 * 1.03)

    def test_net_worth_identity(self, household_profile, as_of):
        for p in generate_projections(household_profile, as_of):
            assert p.net_worth == pytest.approx(
                p.tsp_balance + p.other_investments_balance + p.total_assets - p.total_debt
            ), f"Net worth mismatch at age {p.age}"
            assert p.liquid_net_worth == pytest.approx(
                p.tsp_balance + p.other_investments_balance - p.total_debt
            ), f"Liquid net worth mismatch at age {p.age}"

    def test_income_tax_and_cumulative(self, household_profile, as_of):
        running = 0.0
        for p in generate_projections(household_profile, as_of):
            income = p.pension + p.tsp_distribution + p.social_security + p.spouse_income + p.other_income
            assert p.total_income == pytest.approx(income)
            assert p.taxes == pytest.approx(0.15 * income)
            assert p.net_income == pytest.approx(income - p.expenses - p.taxes)
            running += p.net_income
            assert p.cumulative_savings == pytest.approx(running)


class TestPurity:
    """Test determinism and that the input profile is left alone."""

    def test_deterministic(self, household_profile, as_of):
        assert generate_projections(household_profile, as_of) == generate_projections(household_profile, as_of)

    def test_fresh_records(self, household_profile, as_of):
        first = generate_projections(household_profile, as_of)
        second = generate_projections(household_profile, as_of)
        assert first is not second
        assert first[0] is not second[0]

    def test_profile_not_mutated(self, household_profile, as_of):
        before = household_profile.model_dump()
        run_projection(household_profile, as_of)
        assert household_profile.model_dump() == before

    def test_records_are_frozen(self, fers_profile, as_of):
        first = generate_projections(fers_profile, as_of)[0]
        with pytest.raises(ValidationError):
            first.tsp_balance = 0.0


class TestPluggableHeuristics:
    """Test swapping the Social Security and tax estimates."""

    def test_default_estimates(self):
        assert estimate_social_security(120000, 66) == 0.0
        assert estimate_social_security(120000, 67) == pytest.approx(36000)
        assert estimate_taxes(100000) == pytest.approx(15000)

    def test_custom_models(self, fers_profile, as_of):
        engine = ProjectionEngine(
            fers_profile,
            as_of,
            social_security=lambda high3, age: 1000.0,
            tax_estimator=lambda gross: 0.0,
        )
        for p in engine.run():
            assert p.social_security == 1000.0
            assert p.taxes == 0.0


class TestRunProjection:

    def test_bundle(self, fers_profile, as_of):
        result = run_projection(fers_profile, as_of)

        assert len(result.projections) == 30
        assert result.eligibility.current_age == 56
        assert result.pension_breakdown.high3 == 120000
        assert result.summary.total_lifetime_income == pytest.approx(
            sum(p.total_income for p in result.projections)
        )

    def test_sample_profile_runs(self, as_of):
        from projection.samples import SAMPLE_SCENARIOS

        for scenario in SAMPLE_SCENARIOS.values():
            result = run_projection(scenario.profile, as_of)
            assert result.projections, f"{scenario.name} produced no projection"
            assert result.eligibility.detected_system == "FERS"

    def test_input_accepts_iso_dates(self, fers_profile_dict, as_of):
        profile = Profile.model_validate(fers_profile_dict)
        assert generate_projections(profile, as_of)
