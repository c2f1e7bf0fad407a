"""
Tests for the command-line entry point.
"""

import pytest
import yaml
from unittest.mock import MagicMock, patch

import main
from pipeline.engine import PipelineStats, RunOutcome, RunResult


def _write_config(tmp_path, body):
    config_dir = tmp_path / "config"
    config_dir.mkdir(exist_ok=True)
    path = config_dir / "config.yaml"
    path.write_text(body)
    return str(path)


class TestParser:
    def test_device_index_and_path(self):
        parser = main.build_parser()
        assert parser.parse_args(["--device", "1"]).device == 1
        assert parser.parse_args(["--device", "clip.mp4"]).device == "clip.mp4"

    def test_defaults(self):
        args = main.build_parser().parse_args([])
        assert args.config == "config/config.yaml"
        assert args.headless is False
        assert args.max_frames is None


class TestMain:
    def test_invalid_config_exits_with_failure(self, tmp_path):
        path = _write_config(tmp_path, "camera:\n  device_id: -1\n")
        
        assert main.main(["--config", path]) == main.EXIT_FAILURE

    def test_unparseable_config_exits_with_failure(self, tmp_path):
        path = _write_config(tmp_path, "camera: [unclosed\n")
        
        assert main.main(["--config", path]) == main.EXIT_FAILURE

    @pytest.mark.parametrize("outcome,code", [
        (RunOutcome.QUIT_REQUESTED, main.EXIT_OK),
        (RunOutcome.END_OF_STREAM, main.EXIT_OK),
        (RunOutcome.PIPELINE_FAILED, main.EXIT_FAILURE),
        (RunOutcome.DEVICE_UNAVAILABLE, main.EXIT_DEVICE_UNAVAILABLE),
    ])
    def test_outcome_exit_codes(self, tmp_path, valid_config, outcome, code, capsys):
        path = _write_config(tmp_path, yaml.safe_dump(valid_config))
        engine = MagicMock()
        engine.run.return_value = RunResult(outcome=outcome, stats=PipelineStats())
        
        with patch("main.setup_logging"), \
             patch("main.create_engine_from_config", return_value=engine) as factory:
            assert main.main(["--config", path, "--headless"]) == code
        
        factory.assert_called_once()
        assert factory.call_args.kwargs["display"] is False
        assert capsys.readouterr().out.strip() == RunResult(outcome, PipelineStats()).message

    def test_cli_overrides_reach_config(self, tmp_path, valid_config):
        path = _write_config(tmp_path, yaml.safe_dump(valid_config))
        engine = MagicMock()
        engine.run.return_value = RunResult(outcome=RunOutcome.MAX_FRAMES, stats=PipelineStats())
        
        with patch("main.setup_logging"), \
             patch("main.create_engine_from_config", return_value=engine) as factory:
            main.main(["--config", path, "--device", "clip.mp4", "--max-frames", "7"])
        
        config = factory.call_args.args[0]
        assert config["camera"]["device_id"] == "clip.mp4"
        assert config["pipeline"]["max_frames"] == 7
        assert factory.call_args.kwargs["display"] is None

    def test_missing_camera_reports_device_unavailable(self, tmp_path, valid_config, capsys):
        valid_config["camera"]["device_id"] = str(tmp_path / "missing.mp4")
        path = _write_config(tmp_path, yaml.safe_dump(valid_config))
        
        with patch("main.setup_logging"):
            code = main.main(["--config", path, "--headless"])
        
        assert code == main.EXIT_DEVICE_UNAVAILABLE
        assert "Camera could not be opened" in capsys.readouterr().out

    def test_unwritable_log_path_exits_with_failure(self, tmp_path, valid_config):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("")
        valid_config["log_path"] = str(blocker / "motion.log")
        path = _write_config(tmp_path, yaml.safe_dump(valid_config))
        
        with patch("main.create_engine_from_config") as factory:
            assert main.main(["--config", path, "--headless"]) == main.EXIT_FAILURE
        
        factory.assert_not_called()
