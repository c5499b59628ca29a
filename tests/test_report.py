"""
Test console output of stepwise selection.
"""

import numpy as np

from stepreg import (
    ols_step_forward,
    print_step_forward,
    format_step_forward,
    StepForwardResult,
    StepRecord,
)
from stepreg.report import print_step_detail


def make_result(entered):
    records = tuple(
        StepRecord(step=i, entered=names, rsquare=0.5 + 0.1 * i, adjr=0.45 + 0.1 * i,
                   aic=100.0 - i, sbc=104.0 - i, sbic=20.0 - i,
                   mallows_cp=10.0 / i, rmse=2.0 / i)
        for i, names in enumerate(entered, start=1)
    )
    predictors = tuple(name for names in entered for name in names)
    return StepForwardResult(response='y', predictors=predictors,
                             indvar=predictors + ('z',), records=records,
                             penter=0.3, t_enter=1.067)


class TestSummaryTable:

    def test_header_and_rows(self):
        text = format_step_forward(make_result([('liver_test',), ('alc_heavy',)]))
        lines = text.splitlines()
        assert 'Selection Summary' in lines[0]
        assert 'R-Square' in text and 'C(p)' in text and 'RMSE' in text
        row = next(line for line in lines if 'liver_test' in line)
        assert row.split()[0] == '1'
        assert '0.6000' in row
        assert '99.0000' in row

    def test_tied_step_lists_all_entrants(self):
        text = format_step_forward(make_result([('a', 'b'), ('c',)]))
        assert 'a, b' in text

    def test_long_names_widen_column(self):
        name = 'a_really_long_predictor_name'
        lines = format_step_forward(make_result([(name,)])).splitlines()
        assert len({len(line) for line in lines if set(line) == {'-'}}) == 1
        assert any(name in line for line in lines)

    def test_no_steps(self):
        assert format_step_forward(make_result([])) == \
            "No variables have been added to the model."

    def test_print(self, capsys):
        print_step_forward(make_result([('a',)]))
        assert 'Selection Summary' in capsys.readouterr().out

    def test_str_of_real_result(self, full_model):
        result = ols_step_forward(full_model)
        text = str(result)
        for name in result.predictors:
            assert name in text
        assert f"{result.rsquare[0]:.4f}" in text


class TestStepDetail:

    def test_first_step_header(self, full_model, capsys):
        print_step_detail(1, ('a',), full_model, response='y')
        out = capsys.readouterr().out
        assert out.startswith("Variable Selection Procedure")
        assert "Dependent Variable: y" in out
        assert "Forward Selection: Step 1" in out
        assert "LINEAR REGRESSION RESULTS" in out

    def test_later_step_without_header(self, full_model, capsys):
        print_step_detail(3, ('b', 'c'), full_model)
        out = capsys.readouterr().out
        assert "Variable Selection Procedure" not in out
        assert "Variable(s) b, c Entered" in out
        assert not np.isnan(full_model.sigma)
