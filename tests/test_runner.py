"""Tests for the single-shot script runner and its output formatting."""

import io

import pytest

from functions_sim import ScriptRunner, format_outcome
from functions_sim.codec import ResultDecoder
from functions_sim.simulation import RequestConfig, SimulationOutcome
from functions_sim.simulation.runner import EXIT_FAULT, EXIT_OK, SimulationFault


def _run(config, simulator):
    stdout, stderr = io.StringIO(), io.StringIO()
    runner = ScriptRunner(
        config=config,
        simulator=simulator,
        decoder=ResultDecoder(),
        stdout=stdout,
        stderr=stderr,
    )
    status = runner.run_sync()
    return status, stdout.getvalue(), stderr.getvalue()


def test_response_is_decoded_and_printed(uint_config, make_simulator):
    status, out, err = _run(uint_config, make_simulator(response="0x2a"))

    assert status == EXIT_OK
    assert out == "Response is : \n      42\n\n"
    assert err == ""


def test_reported_error_goes_to_stderr_without_failing(uint_config, make_simulator):
    status, out, err = _run(uint_config, make_simulator(error_message="script threw: boom"))

    assert status == EXIT_OK
    assert out == ""
    assert err == "Error: script threw: boom\n"


def test_response_and_error_are_both_reported(uint_config, make_simulator):
    status, out, err = _run(uint_config, make_simulator(response="0x2a", error_message="partial"))

    assert status == EXIT_OK
    assert "42" in out
    assert "Error: partial" in err


def test_simulator_exception_exits_nonzero(uint_config, make_simulator):
    simulator = make_simulator(raises=ConnectionError("connection refused"))
    status, out, err = _run(uint_config, simulator)

    assert status == EXIT_FAULT
    assert out == ""
    assert "connection refused" in err
    assert err.startswith("ConnectionError")


def test_decode_failure_is_a_fault(make_simulator):
    config = RequestConfig(source="return 1;", expected_return_type="uint8")
    status, out, err = _run(config, make_simulator(response="0x01", error_message="ignored"))

    assert status == EXIT_FAULT
    assert out == ""
    assert "is not valid" in err
    assert "Error: ignored" not in err


def test_empty_outcome_prints_nothing(uint_config, make_simulator):
    status, out, err = _run(uint_config, make_simulator())

    assert (status, out, err) == (EXIT_OK, "", "")


def test_empty_strings_count_as_absent(uint_config, make_simulator):
    status, out, err = _run(uint_config, make_simulator(response="", error_message=""))

    assert (status, out, err) == (EXIT_OK, "", "")


def test_repeated_runs_print_identical_output(uint_config, make_simulator):
    simulator = make_simulator(response="0x" + "00" * 31 + "2a")

    first = _run(uint_config, simulator)
    second = _run(uint_config, simulator)

    assert first == second
    assert len(simulator.configs) == 2
    assert simulator.configs[0] is uint_config


def test_default_streams_are_process_streams(uint_config, make_simulator, capsys):
    runner = ScriptRunner(
        config=uint_config,
        simulator=make_simulator(response="0x2a", error_message="warn"),
        decoder=ResultDecoder(),
    )
    assert runner.run_sync() == EXIT_OK

    captured = capsys.readouterr()
    assert "42" in captured.out
    assert captured.err == "Error: warn\n"


def test_format_outcome_is_pure():
    outcome = SimulationOutcome(response_bytes="0x" + b"hi".hex(), error_message="E")

    assert format_outcome(outcome, "string", ResultDecoder()) == (
        "Response is : \n      hi\n\n",
        "Error: E\n",
    )


def test_fault_description_without_message():
    assert SimulationFault(TimeoutError()).describe() == "TimeoutError"


def test_captured_output_is_logged_at_debug(uint_config, caplog):
    import logging

    class _Simulator:
        async def simulate(self, config):
            return SimulationOutcome(response_bytes="0x01", captured_terminal_output="fetched 3 rows\n\n")

    with caplog.at_level(logging.DEBUG, logger="functions_sim"):
        status, _, _ = _run(uint_config, _Simulator())

    assert status == EXIT_OK
    assert "script> fetched 3 rows" in caplog.text
