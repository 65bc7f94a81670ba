"""Unit tests for PayrollCalculator and aggregation.

Covers the example scenario, the net-salary identity and the named-field
extraction.
"""

import random
from decimal import Decimal

import pytest

from hris_payroll.calculators.aggregator import PayrollAggregator
from hris_payroll.calculators.catalog import default_components
from hris_payroll.calculators.engine import PayrollCalculator
from hris_payroll.calculators.types import (
    ComponentCategory,
    ComponentKey,
    ComponentType,
    ManualDeductions,
    PayrollInputs,
)
from tests.conftest import make_component


class TestExampleScenario:
    """Basic salary 5,000,000 with one allowance and two BPJS lines."""

    @pytest.fixture
    def record(self, example_components, no_manual_deductions):
        calculation = PayrollCalculator.recompute(
            PayrollInputs(
                basic_salary=Decimal("5000000"),
                components=tuple(example_components),
                manual_deductions=no_manual_deductions,
            )
        )
        return calculation.record

    def test_subtotals(self, record):
        """Test allowance and BPJS subtotals."""
        assert record.total_allowances == Decimal("500000")
        assert record.total_bpjs_company == Decimal("200000")
        assert record.total_bpjs_employee == Decimal("50000")

    def test_totals(self, record):
        """Test gross, pendapatan, deductions and net."""
        assert record.gross_salary == Decimal("5500000")
        assert record.total_pendapatan == Decimal("5700000")
        assert record.total_deductions == Decimal("50000")
        assert record.net_salary == Decimal("5650000")

    def test_named_fields(self, record):
        """Test named fields filled from matching components."""
        assert record.position_allowance == Decimal("500000")
        assert record.bpjs_health_company == Decimal("200000")
        assert record.bpjs_health_employee == Decimal("50000")
        # Not configured, so zero
        assert record.bpjs_jht_company == Decimal("0")
        assert record.phone_allowance == Decimal("0")
        assert record.unmapped_components == []


class TestZeroBasicSalary:
    """Non-positive basic salary degrades to manual deductions only."""

    def test_no_components(self):
        """Test that no component is calculated."""
        calculated = PayrollCalculator.calculate_components(
            Decimal("0"),
            default_components(),
        )

        assert calculated == []

    def test_net_is_negative_manual_total(self):
        """Test net salary equals minus the manual deductions."""
        manual = ManualDeductions(
            kasbon=Decimal("100000"),
            telat=Decimal("25000"),
            angsuran_kredit=Decimal("300000"),
        )

        record = PayrollCalculator.aggregate(Decimal("0"), [], manual)

        assert record.net_salary == Decimal("-425000")
        assert record.total_manual_deductions == Decimal("425000")
        assert record.total_deductions == Decimal("425000")


class TestNumericInput:
    """Plain numbers are accepted as basic salary."""

    def test_float_basic_salary(self, example_components):
        """Test float basic salary is coerced to Decimal."""
        calculated = PayrollCalculator.calculate_components(
            5000000.0,
            example_components,
        )

        record = PayrollCalculator.aggregate(5000000.0, calculated)

        assert calculated[1].amount == Decimal("200000")
        assert record.basic_salary == Decimal("5000000")
        assert record.net_salary == Decimal("5650000")

    def test_int_basic_salary(self, example_components):
        """Test int basic salary is coerced to Decimal."""
        calculated = PayrollCalculator.calculate_components(
            5000000,
            example_components,
        )

        record = PayrollCalculator.aggregate(5000000, calculated)

        assert record.net_salary == Decimal("5650000")

    def test_unparsable_basic_salary_is_zero(self, example_components):
        """Test a non-numeric basic salary contributes nothing."""
        calculated = PayrollCalculator.calculate_components(
            float("nan"),
            example_components,
        )

        record = PayrollCalculator.aggregate(float("nan"), calculated)

        assert calculated == []
        assert record.net_salary == Decimal("0")


class TestAggregation:
    """Test slicing, additivity and the net-salary identity."""

    def test_manual_deductions_reduce_net(self, example_components):
        """Test manual deductions flow into total deductions and net."""
        manual = ManualDeductions(
            kasbon=Decimal("200000"),
            telat=Decimal("50000"),
            angsuran_kredit=Decimal("250000"),
        )
        calculated = PayrollCalculator.calculate_components(
            Decimal("5000000"),
            example_components,
        )

        record = PayrollCalculator.aggregate(Decimal("5000000"), calculated, manual)

        assert record.kasbon == Decimal("200000")
        assert record.telat == Decimal("50000")
        assert record.angsuran_kredit == Decimal("250000")
        assert record.total_deductions == Decimal("550000")
        assert record.net_salary == Decimal("5150000")

    def test_allowance_additivity_is_order_independent(self):
        """Test total allowances do not depend on component order."""
        components = [
            make_component("Tunjangan Jabatan", amount="750000"),
            make_component("Tunjangan Pulsa", amount="100000"),
            make_component("Tunjangan Insentif", percentage="7.5"),
            make_component("Tunjangan Lembur", amount="333333"),
            make_component("Bonus Proyek", amount="1250000"),
        ]
        basic = Decimal("6400000")
        expected = (
            Decimal("750000")
            + Decimal("100000")
            + Decimal("480000")
            + Decimal("333333")
            + Decimal("1250000")
        )

        rng = random.Random(7)
        for _ in range(5):
            shuffled = components[:]
            rng.shuffle(shuffled)
            calculated = PayrollCalculator.calculate_components(basic, shuffled)
            record = PayrollCalculator.aggregate(basic, calculated)
            assert record.total_allowances == expected

    def test_net_salary_identity_with_default_configuration(self):
        """Test net equals basic plus income slices minus deductions."""
        basic = Decimal("8750000")
        manual = ManualDeductions(
            kasbon=Decimal("500000"),
            telat=Decimal("75000"),
            angsuran_kredit=Decimal("0"),
        )
        calculated = PayrollCalculator.calculate_components(
            basic,
            default_components(),
        )

        record = PayrollCalculator.aggregate(basic, calculated, manual)

        company = PayrollAggregator.sum_slice(
            calculated, ComponentType.INCOME, ComponentCategory.BPJS
        )
        employee = PayrollAggregator.sum_slice(
            calculated, ComponentType.DEDUCTION, ComponentCategory.BPJS
        )
        assert record.net_salary == (
            basic + record.total_allowances + company - employee - manual.total
        )

    def test_default_configuration_named_fields(self):
        """Test every BPJS field of the default configuration."""
        basic = Decimal("10000000")
        calculated = PayrollCalculator.calculate_components(
            basic,
            default_components(),
        )

        record = PayrollCalculator.aggregate(basic, calculated)

        assert record.bpjs_jht_company == Decimal("370000")
        assert record.bpjs_jkm_company == Decimal("30000")
        assert record.bpjs_jkk_company == Decimal("24000")
        assert record.bpjs_pension_company == Decimal("200000")
        assert record.bpjs_health_company == Decimal("400000")
        assert record.total_bpjs_company == Decimal("1024000")
        assert record.bpjs_health_employee == Decimal("100000")
        assert record.bpjs_jht_employee == Decimal("200000")
        assert record.bpjs_pension_employee == Decimal("100000")
        assert record.total_bpjs_employee == Decimal("400000")
        assert record.phone_allowance == Decimal("100000")
        assert record.incentive_allowance == Decimal("500000")
        assert record.total_allowances == Decimal("600000")
        assert record.net_salary == Decimal("11224000")

    def test_variable_and_fixed_components_not_subtotaled(self):
        """Test fixed and variable categories stay out of the totals."""
        components = [
            make_component(
                "Uang Makan",
                ComponentType.INCOME,
                ComponentCategory.FIXED,
                amount="300000",
            ),
            make_component(
                "Alfa",
                ComponentType.DEDUCTION,
                ComponentCategory.VARIABLE,
                amount="100000",
            ),
        ]
        calculated = PayrollCalculator.calculate_components(
            Decimal("5000000"),
            components,
        )

        record = PayrollCalculator.aggregate(Decimal("5000000"), calculated)

        assert record.total_allowances == Decimal("0")
        assert record.total_deductions == Decimal("0")
        assert record.net_salary == Decimal("5000000")

    def test_named_field_requires_matching_type(self):
        """A health component typed as income cannot fill the employee field."""
        wrong_type = make_component(
            "BPJS Kesehatan (Karyawan)",
            ComponentType.INCOME,
            ComponentCategory.BPJS,
            percentage="1",
        )
        calculated = PayrollCalculator.calculate_components(
            Decimal("5000000"),
            [wrong_type],
        )

        record = PayrollCalculator.aggregate(Decimal("5000000"), calculated)

        assert record.bpjs_health_employee == Decimal("0")
        assert record.total_bpjs_company == Decimal("50000")
        assert record.unmapped_components == ["BPJS Kesehatan (Karyawan)"]

    def test_unknown_label_contributes_to_totals_only(self):
        """Test an unknown label counts in totals but fills no field."""
        renamed = make_component("Tunjangan Jabatan Struktural", amount="400000")
        calculated = PayrollCalculator.calculate_components(
            Decimal("5000000"),
            [renamed],
        )

        record = PayrollCalculator.aggregate(Decimal("5000000"), calculated)

        assert record.position_allowance == Decimal("0")
        assert record.total_allowances == Decimal("400000")
        assert record.unmapped_components == ["Tunjangan Jabatan Struktural"]

    def test_explicit_key_fills_named_field_despite_renamed_label(self):
        """Test an explicit key wins over the label."""
        renamed = make_component(
            "Tunjangan Jabatan Struktural",
            amount="400000",
            key=ComponentKey.POSITION_ALLOWANCE,
        )
        calculated = PayrollCalculator.calculate_components(
            Decimal("5000000"),
            [renamed],
        )

        record = PayrollCalculator.aggregate(Decimal("5000000"), calculated)

        assert record.position_allowance == Decimal("400000")
        assert record.unmapped_components == []

    def test_first_matching_component_fills_named_field(self):
        """Test the first of two components with one key fills the field."""
        components = [
            make_component("Tunjangan Pulsa", amount="100000"),
            make_component("Tunjangan Telepon", amount="150000"),
        ]
        calculated = PayrollCalculator.calculate_components(
            Decimal("5000000"),
            components,
        )

        record = PayrollCalculator.aggregate(Decimal("5000000"), calculated)

        assert record.phone_allowance == Decimal("100000")
        assert record.total_allowances == Decimal("250000")


class TestNetBeforeManualDeductions:
    """Test the reference figure for the manual-deduction ceiling."""

    def test_ignores_manual_deductions(self, example_components):
        """Test the figure is the net with no manual deductions."""
        net = PayrollCalculator.net_before_manual_deductions(
            Decimal("5000000"), example_components
        )

        assert net == Decimal("5650000")

    def test_recompute_is_deterministic(self, example_components):
        """Test equal inputs give equal outputs."""
        inputs = PayrollInputs(
            basic_salary=Decimal("5000000"),
            components=tuple(example_components),
            manual_deductions=ManualDeductions(kasbon=Decimal("1000")),
        )

        first = PayrollCalculator.recompute(inputs)
        second = PayrollCalculator.recompute(inputs)

        assert first.record == second.record
        assert first.calculated_components == second.calculated_components
