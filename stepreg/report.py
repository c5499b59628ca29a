"""
Console output for stepwise selection.

Progress notices go through ``logging``; everything here is printed
to stdout for human inspection and never affects selection.
"""


def print_step_detail(step, entered, model, response=None):
    """
    Print the cumulative fit after an accepted step.

    Parameters
    ----------
    step : int
        1-based step number
    entered : sequence of str
        Predictor(s) admitted in this step
    model : LinearModel
        Fit on every predictor selected so far
    response : str, optional
        Response name; when given a procedure header is printed first
    """
    if response is not None:
        print("Variable Selection Procedure")
        print(f"Dependent Variable: {response}")
        print()
    print(f"Forward Selection: Step {step}")
    print()
    print(f"Variable(s) {', '.join(entered)} Entered")
    model.summary()
    print()


def format_step_forward(result) -> str:
    """
    Format the per-step selection summary as a fixed-width table.

    Parameters
    ----------
    result : StepForwardResult

    Returns
    -------
    str
    """
    if result.steps == 0:
        return "No variables have been added to the model."

    entered = [', '.join(record.entered) for record in result.records]
    w = max(10, max(len(e) for e in entered))
    width = 8 + w + 6 * 12

    lines = []
    lines.append("Selection Summary".center(width))
    lines.append("-" * width)
    lines.append(f"{'':<8}{'Variable':<{w}}{'':>12}{'Adj.':>12}")
    lines.append(
        f"{'Step':<8}{'Entered':<{w}}{'R-Square':>12}{'R-Square':>12}"
        f"{'C(p)':>12}{'AIC':>12}{'SBC':>12}{'RMSE':>12}"
    )
    lines.append("-" * width)
    for record, names in zip(result.records, entered):
        lines.append(
            f"{record.step:>4}    {names:<{w}}{record.rsquare:>12.4f}"
            f"{record.adjr:>12.4f}{record.mallows_cp:>12.4f}"
            f"{record.aic:>12.4f}{record.sbc:>12.4f}{record.rmse:>12.4f}"
        )
    lines.append("-" * width)
    return "\n".join(lines)


def print_step_forward(result):
    """Print the selection summary (see ``format_step_forward``)."""
    print(format_step_forward(result))
