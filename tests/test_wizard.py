"""Tests for the wizard flow."""

import json

import pytest

from cwwizard import aws
from cwwizard.cli import wizard
from cwwizard.cli.wizard import (
    AgentSection,
    MetricsSection,
    WizardContext,
    build_result_map,
    detect_region,
    run_wizard,
)
from cwwizard.utils.config import Config
from cwwizard.utils.exceptions import ConfigFileError, PromptAbortedError
from tests.helpers.scripted_input import ScriptedInput


@pytest.fixture
def no_aws(monkeypatch):
    """Discovery that finds nothing; records which lookups ran."""
    calls = []

    def sdk_region():
        calls.append("sdk")
        return ""

    def sdk_region_with_profile(profile):
        calls.append(("profile", profile))
        return ""

    def default_ec2_region(timeout=1):
        calls.append(("ec2", timeout))
        return ""

    monkeypatch.setattr(aws, "sdk_region", sdk_region)
    monkeypatch.setattr(aws, "sdk_region_with_profile", sdk_region_with_profile)
    monkeypatch.setattr(aws, "default_ec2_region", default_ec2_region)
    monkeypatch.setattr(wizard, "cur_os", lambda: "linux")
    return calls


@pytest.fixture
def config(mock_wizard_dir):
    return Config(mock_wizard_dir)


class TestDetectRegion:
    def test_sdk_region_wins(self, no_aws, config, monkeypatch):
        monkeypatch.setattr(aws, "sdk_region", lambda: "eu-central-1")

        assert detect_region(config, on_ec2=True) == "eu-central-1"
        assert no_aws == []

    def test_profile_then_ec2(self, no_aws, config):
        config.aws_profile = "ops"
        config.imds_timeout_seconds = 2

        assert detect_region(config, on_ec2=True) == ""
        assert no_aws == ["sdk", ("profile", "ops"), ("ec2", 2)]

    def test_on_premises_skips_metadata(self, no_aws, config):
        assert detect_region(config, on_ec2=False) == ""
        assert no_aws == ["sdk"]


class TestSections:
    def test_agent_section(self):
        ctx = WizardContext(os_type="linux", on_ec2=True, region="us-east-1", interval=10)

        assert AgentSection().to_map(ctx) == (
            "agent",
            {"metrics_collection_interval": 10, "region": "us-east-1"},
        )

    def test_metrics_empty_renders_none(self):
        ctx = WizardContext(os_type="linux", on_ec2=False)

        assert MetricsSection(collect_cpu=False).to_map(ctx) == ("metrics", None)

    def test_windows_memory_counter(self):
        ctx = WizardContext(os_type="windows", on_ec2=False)

        _, value = MetricsSection(collect_cpu=False, collect_mem=True).to_map(ctx)

        assert value == {
            "metrics_collected": {
                "Memory": {"measurement": ["% Committed Bytes In Use"]}
            }
        }

    def test_per_core_cpu_adds_resources(self):
        ctx = WizardContext(os_type="linux", on_ec2=False)

        _, value = MetricsSection(per_core_cpu=True).to_map(ctx)

        assert value["metrics_collected"]["cpu"]["resources"] == ["*"]


class TestBuildResultMap:
    def test_defaults_with_detected_region(self, no_aws, config, monkeypatch):
        monkeypatch.setattr(aws, "sdk_region", lambda: "eu-central-1")
        # os, host, region, interval, cpu, per-core, mem
        script = ScriptedInput(["", "2", "", "", "", "1", ""])

        result = build_result_map(script.prompter(), config)

        assert result == {
            "agent": {"metrics_collection_interval": 60, "region": "eu-central-1"},
            "metrics": {
                "metrics_collected": {
                    "cpu": {
                        "measurement": wizard.CPU_MEASUREMENTS,
                        "resources": ["*"],
                    }
                }
            },
        }
        assert script.remaining == 0
        assert "default choice: [eu-central-1]\n\r" in script.text

    def test_asks_until_region_given(self, no_aws, config):
        # os, host, region x2, interval, no cpu, mem
        script = ScriptedInput(["3", "1", "", "us-east-2", "2", "2", "1"])

        result = build_result_map(script.prompter(), config)

        assert result["agent"] == {
            "metrics_collection_interval": 10,
            "region": "us-east-2",
        }
        assert result["metrics"] == {
            "metrics_collected": {"mem": {"measurement": ["mem_used_percent"]}}
        }
        assert ("ec2", 1) in no_aws

    def test_invalid_answers_are_retried(self, no_aws, config, monkeypatch):
        monkeypatch.setattr(aws, "sdk_region", lambda: "us-west-1")
        script = ScriptedInput(["linux", "1", "1", "", "5", "3", "2", "2"])

        result = build_result_map(script.prompter(), config)

        assert result["agent"]["metrics_collection_interval"] == 30
        assert "metrics" not in result
        assert "The value linux is not valid to this question." in script.text
        assert "The value 5 is not valid to this question." in script.text


class TestRunWizard:
    def test_saves_config(self, no_aws, config, monkeypatch):
        monkeypatch.setattr(aws, "sdk_region", lambda: "eu-west-1")
        script = ScriptedInput(["", "", "", "", "2", "", ""])

        path = run_wizard(script.prompter(), config)

        assert path == config.config_file
        data = json.loads(path.read_text())
        assert data["agent"]["region"] == "eu-west-1"
        assert "metrics" not in data

    def test_declined_save(self, no_aws, config, monkeypatch):
        monkeypatch.setattr(aws, "sdk_region", lambda: "eu-west-1")
        script = ScriptedInput(["", "", "", "", "2", "", "2"])

        assert run_wizard(script.prompter(), config) is None
        assert config.config_file.read_text() == ""

    def test_closed_input_propagates(self, no_aws, config):
        script = ScriptedInput(["1"])

        with pytest.raises(PromptAbortedError):
            run_wizard(script.prompter(), config)


class TestRunWizardFreshDir:
    def test_creates_wizard_dir(self, no_aws, temp_dir, monkeypatch):
        monkeypatch.setattr(aws, "sdk_region", lambda: "eu-west-1")
        config = Config(temp_dir / "new" / "cwwizard")
        script = ScriptedInput(["", "", "", "", "2", "", ""])

        path = run_wizard(script.prompter(), config)

        assert path == temp_dir / "new" / "cwwizard" / "config.json"
        assert json.loads(path.read_text())["agent"]["region"] == "eu-west-1"

    def test_blocked_dir_raises_config_file_error(
        self, no_aws, temp_dir, mock_wizard_dir
    ):
        blocker = temp_dir / "blocker"
        blocker.write_text("")
        config = Config(blocker / "sub")

        with pytest.raises(ConfigFileError, match="write permission"):
            run_wizard(ScriptedInput([]).prompter(), config)
