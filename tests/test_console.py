from forgekit.console import ForgeConsole

from entropyforge.analyzers.complexity import analyze_password
from entropyforge.core.models import UniformityResult
from entropyforge.output.console import ForgeConsoleOutput, mask_password


def _result(name: str, passed: bool) -> UniformityResult:
    return UniformityResult(
        name=name,
        samples=1_000,
        categories=6,
        chi_squared=3.2 if passed else 40.0,
        p_value=0.67 if passed else 0.0001,
        alpha=0.01,
        passed=passed,
    )


def test_uniformity_failures_are_reported_as_warning():
    display = ForgeConsoleOutput(ForgeConsole())
    with display.console.rich.capture() as captured:
        display.display_uniformity([_result("charset", True), _result("dice", False)])
    text = captured.get()
    assert "WARNING" in text
    assert "dice" in text


def test_weaknesses_table_lists_suggestions():
    display = ForgeConsoleOutput(ForgeConsole())
    with display.console.rich.capture() as captured:
        display.display_complexity("abc", analyze_password("abc"))
    text = captured.get()
    assert "Password too short" in text
    assert "a*c" in text


def test_strong_password_reports_success():
    display = ForgeConsoleOutput(ForgeConsole())
    password = "Zq7!mR2#vK9@wL4$xT8&"
    with display.console.rich.capture() as captured:
        display.display_complexity(password, analyze_password(password))
    assert "No weaknesses detected" in captured.get()


def test_mask_password():
    assert mask_password("") == ""
    assert mask_password("ab") == "**"
    assert mask_password("hunter2") == "h*****2"
