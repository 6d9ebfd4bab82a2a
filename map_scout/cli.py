# === FILE: map_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска сборщика MapScout через командную строку.

Команды:
  collect   Прогнать записанный лог протокола и собрать source maps
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда collect опции:
  --json PATH             Сохранить артефакты в JSON-файл
  --pretty                Преформатировать JSON-вывод (отступ 2)
  --collect-timeout SEC   Таймаут всего сбора (секунд)

Дополнительно:
  --version, -v       Показать версию MapScout

Пример:
  map_scout collect devtoolslog.json --json maps.json --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from map_scout import __version__
from map_scout.config import load_config
from map_scout.engine import collect_source_maps
from map_scout.events import load_protocol_messages
from map_scout.logger import DEFAULT_FORMAT, init_logging
from map_scout.report.json_report import artifacts_to_json, render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='MapScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (только stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд MapScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('collect', context_settings=CONTEXT_SETTINGS)
@click.argument(
    'events_file',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить артефакты в JSON-файл'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.option(
    '--collect-timeout', 'collect_timeout',
    type=float,
    default=None,
    help='Таймаут всего сбора (секунд)'
)
@click.pass_context
def collect(ctx, events_file, json_output, pretty, collect_timeout):
    """Собрать source maps для скриптов из записанного лога протокола."""
    cfg = ctx.obj['config']
    try:
        messages = load_protocol_messages(events_file)
    except Exception as e:
        print_error(f'Ошибка чтения лога: {e}')

    try:
        if collect_timeout:
            artifacts = asyncio.run(
                asyncio.wait_for(collect_source_maps(cfg, messages), timeout=collect_timeout)
            )
        else:
            artifacts = asyncio.run(collect_source_maps(cfg, messages))
    except asyncio.TimeoutError:
        print_error(f'Сбор не завершён за {collect_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при сборе: {e}')

    if json_output:
        try:
            saved_json = render_json(artifacts, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')
        return

    indent = 2 if pretty else None
    click.echo(json.dumps(artifacts_to_json(artifacts), ensure_ascii=False, indent=indent))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
