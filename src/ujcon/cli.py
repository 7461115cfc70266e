"""Root CLI command for ujcon: ``ujcon -d AMOUNT`` or ``ujcon -y AMOUNT``."""

from __future__ import annotations

import click

from ujcon import __version__
from ujcon.commands._base import UjconCommand
from ujcon.commands._context import AppContext
from ujcon.config.settings import UjconSettings
from ujcon.domain.conversion import Direction

EXAMPLES = """\
  ujcon -d 100            # 100ドルを円に変換
  ujcon -d 100-200        # 100〜200ドルを円に変換
  ujcon -y 10000          # 10000円をドルに変換
  ujcon -y 10000-20000    # 10000〜20000円をドルに変換"""

MISSING_AMOUNT_MESSAGE = """\
エラー: -d または -y オプションで金額を指定してください
使用例:
  ujcon -d 100    # 100ドルを円に変換
  ujcon -y 10000  # 10000円をドルに変換"""


@click.command(
    cls=UjconCommand,
    examples=EXAMPLES,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="ujcon")
@click.option(
    "-d",
    "--dollar",
    "--u",
    "--usd",
    "--USD",
    "dollar",
    metavar="AMOUNT",
    default=None,
    help="ドルを円に変換（単一値またはレンジ: 例: 100 または 100-200）",
)
@click.option(
    "-y",
    "--yen",
    "--j",
    "--jpy",
    "--JPY",
    "yen",
    metavar="AMOUNT",
    default=None,
    help="円をドルに変換（単一値またはレンジ: 例: 10000 または 10000-20000）",
)
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    dollar: str | None,
    yen: str | None,
    verbose: bool,
    log_json: bool,
) -> None:
    """USD↔JPY為替レート変換ツール"""
    if dollar is not None and yen is not None:
        raise click.UsageError("-d と -y は同時に指定できません", ctx=ctx)
    if dollar is None and yen is None:
        click.echo(MISSING_AMOUNT_MESSAGE, err=True)
        ctx.exit(1)

    settings = UjconSettings.from_cli(verbose=verbose, log_json=log_json)
    app = AppContext(settings)
    ctx.obj = app

    from ujcon.services.convert import ConvertService

    if dollar is not None:
        direction, raw_amount = Direction.USD_TO_JPY, dollar
    else:
        direction, raw_amount = Direction.JPY_TO_USD, yen
    app.emit(ConvertService(app.fetcher).convert(raw_amount, direction))
