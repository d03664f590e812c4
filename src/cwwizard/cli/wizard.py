"""First-run wizard flow."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from cwwizard import aws
from cwwizard.config_file import (
    add_to_map,
    permission_check,
    save_result_to_json_file,
    serialize_result_map,
)
from cwwizard.prompts import Prompter
from cwwizard.utils.config import Config
from cwwizard.utils.constants import (
    MAP_KEY_INSTANCES,
    MAP_KEY_MEASUREMENT,
    MAP_KEY_METRICS_COLLECTION_INTERVAL,
    METRICS_COLLECTION_INTERVALS,
    OS_TYPE_WINDOWS,
    OS_TYPES,
    cur_os,
)
from cwwizard.utils.debug import debug

HOST_EC2 = "EC2"
HOST_ON_PREMISES = "On-Premises"

CPU_MEASUREMENTS = [
    "cpu_usage_idle",
    "cpu_usage_iowait",
    "cpu_usage_user",
    "cpu_usage_system",
]
MEM_MEASUREMENTS = ["mem_used_percent"]
WINDOWS_MEM_MEASUREMENTS = ["% Committed Bytes In Use"]


@dataclass
class WizardContext:
    """Answers collected so far, shared by all sections."""

    os_type: str
    on_ec2: bool
    region: str = ""
    interval: int = 60


@dataclass
class AgentSection:
    """The `agent` section of the config."""

    def to_map(self, ctx: WizardContext) -> tuple[str, Any]:
        agent: dict[str, Any] = {MAP_KEY_METRICS_COLLECTION_INTERVAL: ctx.interval}
        if ctx.region:
            agent["region"] = ctx.region
        return "agent", agent


@dataclass
class MetricsSection:
    """The `metrics` section of the config.

    Renders to nothing when no metric group was picked.
    """

    per_core_cpu: bool = False
    collect_cpu: bool = True
    collect_mem: bool = False

    def to_map(self, ctx: WizardContext) -> tuple[str, Any]:
        collected: dict[str, Any] = {}
        if self.collect_cpu:
            cpu: dict[str, Any] = {MAP_KEY_MEASUREMENT: list(CPU_MEASUREMENTS)}
            if self.per_core_cpu:
                cpu[MAP_KEY_INSTANCES] = ["*"]
            collected["cpu"] = cpu
        if self.collect_mem:
            if ctx.os_type == OS_TYPE_WINDOWS:
                collected["Memory"] = {
                    MAP_KEY_MEASUREMENT: list(WINDOWS_MEM_MEASUREMENTS)
                }
            else:
                collected["mem"] = {MAP_KEY_MEASUREMENT: list(MEM_MEASUREMENTS)}
        if not collected:
            return "metrics", None
        return "metrics", {"metrics_collected": collected}


def detect_region(config: Config, on_ec2: bool) -> str:
    """Best-effort region: SDK chain, then configured profile, then EC2 metadata."""
    region = aws.sdk_region()
    if not region and config.aws_profile:
        region = aws.sdk_region_with_profile(config.aws_profile)
    if not region and on_ec2:
        region = aws.default_ec2_region(config.imds_timeout_seconds)
    debug("wizard", "detected region", region=region or "-")
    return region


def _default_index(values: list[str], value: str) -> int:
    """1-based position of value, falling back to the last entry."""
    try:
        return values.index(value) + 1
    except ValueError:
        return len(values)


def build_result_map(prompter: Prompter, config: Config) -> dict[str, Any]:
    """Ask the wizard questions and return the config map."""
    os_type = prompter.choice(
        "On which OS are you planning to use the agent?",
        _default_index(OS_TYPES, cur_os()),
        OS_TYPES,
    )
    host = prompter.choice(
        "Are you using EC2 or On-Premises hosts?", 1, [HOST_EC2, HOST_ON_PREMISES]
    )
    ctx = WizardContext(os_type=os_type, on_ec2=host == HOST_EC2)

    region = detect_region(config, ctx.on_ec2)
    if region:
        ctx.region = prompter.ask_with_default(
            "Which AWS region should the agent report to?", region
        )
    else:
        while not ctx.region:
            ctx.region = prompter.ask("Which AWS region should the agent report to?")

    interval = prompter.choice(
        "Pick a metrics collection interval in seconds:",
        _default_index(
            METRICS_COLLECTION_INTERVALS, str(config.metrics_collection_interval)
        ),
        METRICS_COLLECTION_INTERVALS,
    )
    ctx.interval = int(interval)

    metrics = MetricsSection()
    metrics.collect_cpu = prompter.yes("Do you want to monitor CPU metrics?")
    if metrics.collect_cpu:
        metrics.per_core_cpu = prompter.yes(
            "Do you want to monitor CPU metrics per core?"
        )
    metrics.collect_mem = prompter.no("Do you want to monitor memory metrics?")

    result_map: dict[str, Any] = {}
    add_to_map(ctx, result_map, AgentSection())
    add_to_map(ctx, result_map, metrics)
    return result_map


def run_wizard(
    prompter: Optional[Prompter] = None, config: Optional[Config] = None
) -> Optional[Path]:
    """Run the wizard end to end.

    Returns:
        Path of the saved config, or None if the operator chose not to save.
    """
    from cwwizard.cli.ui import console

    prompter = prompter or Prompter()
    config = config or Config()
    permission_check(config.config_file)

    console.print("[bold cyan]cwwizard setup[/bold cyan]\n")
    result_map = build_result_map(prompter, config)
    data = serialize_result_map(result_map)

    console.print("Current config as follows:")
    print(data.decode())

    question = f"Do you want to store the config in the file {config.config_file}?"
    if not prompter.yes(question):
        return None
    return save_result_to_json_file(data, config.config_file)
