# === FILE: robots_policy/cli.py ===
#!/usr/bin/env python3
"""
Точка входа командной строки robots-policy.

Команды:
  check     Проверить, разрешены ли URL для User-Agent
  group     Показать группу правил, выбранную для User-Agent (JSON)
  clean     Удалить параметры запроса по правилам Clean-param
  sitemaps  Показать Sitemap и Host
  config    Показать текущие настройки

SOURCE: путь к локальному robots.txt или http(s)-адрес сайта.

Общие опции:
  --config PATH       Путь к YAML/JSON-настройкам (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования
  --version, -v       Показать версию

Пример:
  robots-policy check https://example.com /private /public/page --agent Googlebot/2.1
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from robots_policy import __version__
from robots_policy.exceptions import RobotsPolicyError
from robots_policy.logger import configure as configure_logging
from robots_policy.parser.robots_parser import parse_file
from robots_policy.policy.access import is_allowed, is_allowed_url
from robots_policy.policy.models import Config, Group
from robots_policy.policy.query import clean_param
from robots_policy.settings import PolicySettings, load_settings
from robots_policy.transport.fetcher import fetch_config
from robots_policy.utils import is_remote_source

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def load_policy(source: str, settings: PolicySettings) -> Config:
    """Загружает robots.txt из файла или по сети и разбирает его."""
    if is_remote_source(source):
        return asyncio.run(
            fetch_config(
                source,
                user_agent=settings.user_agent,
                timeout=settings.timeout,
                agent_grouping=settings.agent_grouping,
            )
        )
    return parse_file(source, agent_grouping=settings.agent_grouping)


def group_key(config: Config, group: Group):
    """Возвращает ключ группы в Config или None для пустой группы по умолчанию."""
    for key, candidate in config.groups.items():
        if candidate is group:
            return key
    return None


def describe_group(config: Config, group: Group) -> dict:
    visit = None
    if group.visit_time is not None:
        visit = {
            'from': group.visit_time.start.strftime('%H:%M'),
            'to': group.visit_time.end.strftime('%H:%M'),
        }
    return {
        'key': group_key(config, group),
        'crawl_delay': group.crawl_delay,
        'visit_time': visit,
        'allow': [m.pattern for m in group.allows],
        'disallow': [m.pattern for m in group.disallows],
        'clean_param': [
            {'params': list(rule.params), 'pattern': rule.pattern.pattern}
            for rule in group.clean_params
        ],
    }


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='robots-policy, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу настроек YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Разбор robots.txt и проверка URL."""
    configure_logging(level=log_level, log_file=log_file, log_format=log_format)
    try:
        settings = load_settings(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки настроек: {e}')
    ctx.ensure_object(dict)
    ctx.obj['settings'] = settings


def _policy_from_ctx(ctx, source: str) -> Config:
    try:
        return load_policy(source, ctx.obj['settings'])
    except (RobotsPolicyError, OSError, ValueError) as e:
        print_error(f'Ошибка загрузки robots.txt: {e}')


agent_option = click.option(
    '--agent', '-a', 'agent',
    default=None,
    help='User-Agent (по умолчанию из настроек)'
)


@cli.command('check', context_settings=CONTEXT_SETTINGS)
@click.argument('source')
@click.argument('urls', nargs=-1, required=True)
@agent_option
@click.pass_context
def check(ctx, source, urls, agent):
    """Вывести allow/disallow для каждого URL."""
    settings = ctx.obj['settings']
    config = _policy_from_ctx(ctx, source)
    group = config.match_group(agent or settings.user_agent)
    for url in urls:
        if url.startswith('/'):
            allowed = is_allowed(group, url)
        else:
            allowed = is_allowed_url(group, url)
        click.echo(f"{'allow' if allowed else 'disallow'}\t{url}")


@cli.command('group', context_settings=CONTEXT_SETTINGS)
@click.argument('source')
@agent_option
@click.pass_context
def show_group(ctx, source, agent):
    """Показать группу правил для User-Agent в JSON."""
    settings = ctx.obj['settings']
    config = _policy_from_ctx(ctx, source)
    group = config.match_group(agent or settings.user_agent)
    click.echo(json.dumps(describe_group(config, group), ensure_ascii=False, indent=2))


@cli.command('clean', context_settings=CONTEXT_SETTINGS)
@click.argument('source')
@click.argument('urls', nargs=-1, required=True)
@agent_option
@click.pass_context
def clean(ctx, source, urls, agent):
    """Удалить параметры запроса по правилам Clean-param."""
    settings = ctx.obj['settings']
    config = _policy_from_ctx(ctx, source)
    group = config.match_group(agent or settings.user_agent)
    for url in urls:
        click.echo(clean_param(group, url))


@cli.command('sitemaps', context_settings=CONTEXT_SETTINGS)
@click.argument('source')
@click.pass_context
def sitemaps(ctx, source):
    """Показать адреса Sitemap и директиву Host."""
    config = _policy_from_ctx(ctx, source)
    for url in config.sitemaps:
        click.echo(f'sitemap\t{url}')
    if config.host is not None:
        click.echo(f'host\t{config.host.netloc}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущие настройки в JSON."""
    settings = ctx.obj['settings']
    click.echo(settings.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
