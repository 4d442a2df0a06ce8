import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.parent
EXAMPLES_DIR = PROJECT_ROOT / "examples"


def run_example(name: str) -> str:
    """Runs an example script as a separate process and returns its output."""
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))
    process = subprocess.run(
        [sys.executable, str(EXAMPLES_DIR / f"{name}.py")],
        capture_output=True,
        text=True,
        check=True,
        cwd=PROJECT_ROOT,
        env=env,
    )
    return process.stdout


def test_generate_example():
    output = run_example("01_basics/01_generate").splitlines()
    assert output == [
        "--- Bounded by a limit stage ---",
        "Hello 0", "Hello 1", "Hello 2",
        "--- Bounded by the consumer ---",
        "Hello 0", "Hello 1",
    ]


def test_consumers_example():
    output = run_example("01_basics/02_consumers").splitlines()
    numbers = [str(n) for n in range(1, 11)]
    assert output == (
        ["--- Callable object ---"] + numbers
        + ["--- Lambda ---"] + numbers
        + ["--- Function reference ---"] + numbers
    )


def test_filter_example():
    output = run_example("01_basics/03_filter").splitlines()
    expected = ["6", "7", "8", "9", "10"]
    assert output == (
        ["--- Imperative ---"] + expected
        + ["--- Stage object ---"] + expected
        + ["--- Fluent ---"] + expected
    )


def test_stateless_vs_stateful_example():
    output = run_example("02_stages/01_stateless_vs_stateful")
    assert "--- With sorted ---" in output
    with_sorted = output.split("--- With sorted ---")[1].splitlines()
    assert with_sorted.index("Filter done for the element 10") < with_sorted.index("Sorted done for the element 2")


def test_aggregators_example():
    output = run_example("02_stages/02_aggregators")
    assert "[3, 1, 2]" in output
    assert "[5, 6, 7]" in output
    assert "[1, 3, 6, 10]" in output
    assert "Total sum: 45" in output
