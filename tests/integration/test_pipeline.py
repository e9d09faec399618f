"""
Integration tests for end-to-end evaluation runs.
"""

import json
import logging
import os

import pytest

from approxlab.cli import build_evaluators, main, run_evaluation
from approxlab.config import RunConfig
from approxlab.errors import ConfigurationError
from approxlab.evaluation import AccuracyReport, PerformanceReport
from approxlab.family import build_family
from approxlab.registry import build_registry
from approxlab.utils.logging import setup_logger


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers bound to per-test streams and directories."""
    yield
    logger = logging.getLogger("approxlab")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _small_config(output_dir, **overrides):
    config = RunConfig(name="integration", output_dir=str(output_dir), **overrides)
    config.accuracy.points = 500
    config.performance.iterations = 2000
    config.performance.seed = 42
    return config


def _quiet_logger(output_dir):
    return setup_logger(
        name="approxlab",
        log_dir=os.path.join(str(output_dir), "logs"),
        console_output=False
    )


def test_full_run(tmp_path):
    config = _small_config(tmp_path)

    results = run_evaluation(config, logger=_quiet_logger(tmp_path))

    assert isinstance(results['accuracy_report'], AccuracyReport)
    assert isinstance(results['performance_report'], PerformanceReport)
    assert results['accuracy']['start'] == pytest.approx(-3.141592653589793)
    assert results['accuracy']['points'] == 500

    with open(os.path.join(str(tmp_path), 'results.json')) as f:
        saved = json.load(f)
    assert saved['run_id'] == results['run_id']
    assert 'accuracy_report' not in saved
    assert len(saved['accuracy']['results']) == 3
    assert len(saved['performance']['results']) == 3

    with open(os.path.join(str(tmp_path), 'environment.json')) as f:
        env = json.load(f)
    assert env['run_id'] == results['run_id']
    assert 'python_version' in env


def test_accuracy_only_with_selected_variants(tmp_path):
    config = _small_config(
        tmp_path, mode="accuracy",
        variants=["Chebyshev polynomial sine approximation"]
    )
    config.accuracy.start = -0.5
    config.accuracy.end = 0.5

    results = run_evaluation(config, logger=_quiet_logger(tmp_path))

    assert 'performance' not in results
    report = results['accuracy_report']
    assert report.start == -0.5
    assert [s.variant for s in report.results] == ["Chebyshev polynomial sine approximation"]
    assert report.results[0].max_abs_error < 1e-8


def test_unknown_family_raises(tmp_path):
    config = _small_config(tmp_path, family="Cos Approximations")

    with pytest.raises(ConfigurationError):
        run_evaluation(config, logger=_quiet_logger(tmp_path))


def test_unknown_variant_raises(tmp_path):
    config = _small_config(tmp_path, variants=["Lookup table sine"])

    with pytest.raises(ConfigurationError):
        run_evaluation(config, logger=_quiet_logger(tmp_path))


def test_cli_rejects_invalid_points(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(['--points', '0', '--output-dir', str(tmp_path)])

    assert exc_info.value.code == 1
    assert "Test points must be positive" in capsys.readouterr().err


def test_cli_rejects_unknown_reference(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(['--reference', 'cos', '--output-dir', str(tmp_path)])

    assert exc_info.value.code == 1
    assert "Configuration error" in capsys.readouterr().err


def test_cli_prints_reports(tmp_path, capsys):
    main([
        '--points', '200',
        '--iterations', '1000',
        '--seed', '1',
        '--output-dir', str(tmp_path),
    ])

    out = capsys.readouterr().out
    assert "ACCURACY TEST RESULTS" in out
    assert "PERFORMANCE TEST RESULTS" in out
    assert "Testing: CORDIC sine approximation" in out
    assert os.path.exists(os.path.join(str(tmp_path), 'results.json'))


def test_cli_loads_config_file(tmp_path, capsys):
    config_path = os.path.join(str(tmp_path), 'run.yaml')
    with open(config_path, 'w') as f:
        f.write(
            "name: from_file\n"
            "mode: accuracy\n"
            "accuracy:\n"
            "  points: 100\n"
            "  report_worst: false\n"
        )

    main(['--config', config_path, '--output-dir', str(tmp_path)])

    out = capsys.readouterr().out
    assert "ACCURACY TEST RESULTS" in out
    assert "PERFORMANCE TEST RESULTS" not in out
    assert "Worst cases:" not in out


def _counting_registry(reference, identity_variant):
    family = build_family("Counted", (-1.0, 1.0), [reference], [identity_variant])
    return build_registry([family])


def test_invalid_performance_settings_stop_before_accuracy_run(tmp_path, counting_reference, identity_variant):
    """Both evaluators are checked before either one samples."""
    reference, counter = counting_reference
    config = _small_config(tmp_path, family="Counted")
    config.accuracy.points = 100
    config.performance.iterations = 0

    with pytest.raises(ConfigurationError):
        run_evaluation(
            config,
            registry=_counting_registry(reference, identity_variant),
            logger=_quiet_logger(tmp_path)
        )

    assert counter.calls == 0
    assert not os.path.exists(os.path.join(str(tmp_path), 'environment.json'))
    assert not os.path.exists(os.path.join(str(tmp_path), 'results.json'))


def test_build_evaluators_follows_mode(tmp_path, counting_reference, identity_variant):
    reference, counter = counting_reference
    registry = _counting_registry(reference, identity_variant)

    evaluators = build_evaluators(_small_config(tmp_path, family="Counted", mode="performance"), registry)

    assert 'accuracy' not in evaluators
    assert evaluators['performance'].iterations == 2000
    assert [v.name for v in evaluators['variants']] == ["identity"]
    assert counter.calls == 0


def test_seed_is_recorded(tmp_path):
    config = _small_config(tmp_path, mode="performance")

    first = run_evaluation(config, logger=_quiet_logger(tmp_path))
    second = run_evaluation(config, logger=_quiet_logger(tmp_path))

    assert first['performance']['reference_sum'] == second['performance']['reference_sum']
    with open(os.path.join(str(tmp_path), 'environment.json')) as f:
        assert json.load(f)['random_seed'] == 42


@pytest.mark.parametrize("content", [
    "name: bad\npoint: 10\n",
    "accuracy:\n  point: 10\n",
    "name: [unclosed\n",
    "- just\n- a list\n",
])
def test_cli_rejects_bad_config_file(content, tmp_path, capsys):
    config_path = os.path.join(str(tmp_path), 'bad.yaml')
    with open(config_path, 'w') as f:
        f.write(content)

    with pytest.raises(SystemExit) as exc_info:
        main(['--config', config_path, '--output-dir', str(tmp_path)])

    assert exc_info.value.code == 1
    assert "could not load config" in capsys.readouterr().err


def test_cli_rejects_unknown_log_level(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(['--log-level', 'LOUD', '--output-dir', str(tmp_path)])

    assert exc_info.value.code == 1
    assert "Log level must be one of" in capsys.readouterr().err
