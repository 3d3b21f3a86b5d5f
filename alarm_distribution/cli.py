"""
告警状态分布命令行入口模块。

提供 CLI 命令：query（查询元素告警状态分布）和 check（验证配置文件）。
"""
import json
import logging
import sys

import click

from alarm_distribution import __version__
from alarm_distribution.channel import HttpReportingChannel
from alarm_distribution.config import load_config
from alarm_distribution.exceptions import AlarmDistributionError
from alarm_distribution.schemas import SourceContext
from alarm_distribution.source import PROPORTION_COLUMN, STATE_COLUMN, AlarmStateDistributionSource

# 不带时区的输入视为 UTC
DATETIME_FORMATS = ["%Y-%m-%dT%H:%M:%SZ", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d"]


@click.group(invoke_without_command=True)
@click.option("--config", "-c", default="/etc/alarm-distribution/config.yaml", help="Config file path")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, config, verbose):
    """Element alarm state distribution - 元素告警状态分布查询。"""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # 未指定子命令时，显示基本信息
    if ctx.invoked_subcommand is None:
        click.echo(f"Alarm distribution v{__version__}")
        click.echo(f"Config: {config}")
        click.echo("Use --help for available commands")


def _render_table(rows) -> str:
    width = max(len(STATE_COLUMN), *(len(r.state) for r in rows))
    lines = [f"{STATE_COLUMN:<{width}}  {PROPORTION_COLUMN}"]
    lines += [f"{r.state:<{width}}  {r.display}" for r in rows]
    return "\n".join(lines)


@cli.command()
@click.argument("element_id")
@click.option("--start", "start", required=True, type=click.DateTime(formats=DATETIME_FORMATS), help="UTC start time")
@click.option("--end", "end", required=True, type=click.DateTime(formats=DATETIME_FORMATS), help="UTC end time")
@click.option("--json", "as_json", is_flag=True, help="Output rows as JSON")
@click.pass_context
def query(ctx, element_id, start, end, as_json):
    """查询元素在时间窗口内的告警状态分布。"""
    logger = logging.getLogger("alarm-distribution")
    config_path = ctx.obj["config_path"]

    try:
        cfg = load_config(config_path)
        cfg.report.apply_locale()
    except (FileNotFoundError, AlarmDistributionError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logger.debug(f"Server: {cfg.server.url}")
    logger.debug(f"Element: {element_id}, window: {start} -> {end}")

    source = AlarmStateDistributionSource()
    with HttpReportingChannel(cfg.server.url, cfg.server.token, cfg.server.timeout) as channel:
        source.initialize(SourceContext(channel=channel, local_timezone=cfg.report.zone()))
        page = source.query(element_id, start, end)

    if as_json:
        click.echo(json.dumps([r.model_dump() for r in page.rows], ensure_ascii=False, indent=2))
    else:
        click.echo(_render_table(page.rows))


@cli.command()
@click.pass_context
def check(ctx):
    """验证配置文件是否正确。"""
    config_path = ctx.obj["config_path"]
    try:
        cfg = load_config(config_path)
        click.echo(f"✅ Config OK: {config_path}")
        click.echo(f"   Server: {cfg.server.url}")
        click.echo(f"   Timeout: {cfg.server.timeout}s")
        click.echo(f"   Timezone: {cfg.report.local_timezone or '(local)'}")
        click.echo(f"   Locale: {cfg.report.locale or '(process default)'}")
    except Exception as e:
        click.echo(f"❌ Config error: {e}", err=True)
        sys.exit(1)


def main():
    """CLI 入口函数。"""
    cli()


if __name__ == "__main__":
    main()
