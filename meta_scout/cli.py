# === FILE: meta_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера MetaScout через командную строку.

Команды:
  crawl SEEDS_CSV   Обойти seed-URL из CSV и сохранить отчёты
  config            Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования
  --no-color          Не раскрашивать уровни логов

Команда crawl опции:
  --depth INT         Максимальная глубина обхода (override max_depth)
  --output-dir DIR    Каталог для CSV-файлов (override output_dir)
  --prefix NAME       Префикс CSV-файлов (override output_prefix)
  --json PATH         Сохранить JSON-дамп деревьев обхода
  --html PATH         Сохранить HTML-отчёт
  --template DIR      Папка с Jinja2-шаблонами
  --scan-timeout SEC  Таймаут всего обхода (секунд)

Пример:
  meta_scout crawl links.csv --depth 2 --output-dir reports --json reports/crawl.json
"""
import asyncio
import sys
from pathlib import Path

import click

from meta_scout import __version__
from meta_scout.config import load_config
from meta_scout.engine import Engine
from meta_scout.logger import init_logging
from meta_scout.report.csv_report import render_csv
from meta_scout.report.html_report import render_html
from meta_scout.report.json_report import render_json
from meta_scout.seeds import load_seeds

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='MetaScout, version %(version)s')
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
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.option('--no-color', is_flag=True, help='Не раскрашивать уровни логов')
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format, no_color):
    """Группа команд MetaScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
        color=not no_color,
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('seeds_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--depth', '-d', 'depth', type=click.IntRange(min=1), default=None,
              help='Максимальная глубина обхода (override max_depth)')
@click.option('--output-dir', '-o', 'output_dir', default=None,
              type=click.Path(file_okay=False, path_type=Path),
              help='Каталог для CSV-файлов (override output_dir)')
@click.option('--prefix', '-p', 'prefix', default=None,
              help='Префикс CSV-файлов (override output_prefix)')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-дамп деревьев обхода'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблонами (по умолчанию встроенная)'
)
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=float,
    default=None,
    help='Таймаут всего обхода (секунд)'
)
@click.pass_context
def crawl(ctx, seeds_file, depth, output_dir, prefix, json_output, html_output, template_dir, scan_timeout):
    """Обойти seed-URL из CSV и сгенерировать отчёты."""
    cfg = ctx.obj['config']
    overrides = {
        key: value
        for key, value in (('max_depth', depth), ('output_dir', output_dir), ('output_prefix', prefix))
        if value is not None
    }
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    try:
        seeds = load_seeds(seeds_file)
    except Exception as e:
        print_error(f'Ошибка чтения seed-файла: {e}')
    if not seeds:
        print_error(f'В {seeds_file} нет ни одного корректного URL')

    click.echo(f'Crawling {len(seeds)} seed(s), max depth {cfg.max_depth}')
    try:
        run = Engine(cfg).run(seeds, scan_timeout=scan_timeout)
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {scan_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    try:
        paths = render_csv(run.report, cfg.output_dir, cfg.output_prefix)
    except OSError as e:
        print_error(f'Ошибка при сохранении CSV: {e}')
    for kind, path in paths.items():
        click.echo(f'CSV {kind}: {path}')

    if json_output:
        try:
            click.echo(f'JSON report: {render_json(run.trees, json_output)}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            click.echo(f'HTML report: {render_html(run.report, template_dir, html_output)}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
