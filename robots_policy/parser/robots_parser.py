# File: robots_policy/parser/robots_parser.py
"""robots_policy.parser.robots_parser: Построчный парсер robots.txt в объект Config.

Структурные ошибки (строка без ``:``) фатальны и приводят к InvalidContentError.
Некорректные значения директив (URL, число, время) молча отбрасываются или
превращаются в нулевые значения.
"""

from __future__ import annotations

import io
import re
from contextlib import closing, nullcontext
from dataclasses import dataclass, field
from datetime import datetime, time
from pathlib import Path
from typing import IO, Callable, Iterable, Iterator, List, Literal, Optional, Union
from urllib.parse import SplitResult

from robots_policy.exceptions import InvalidContentError
from robots_policy.logger import logger
from robots_policy.parser.pattern import Matcher, compile_pattern
from robots_policy.policy.models import CleanParamRule, Config, Group, VisitTime
from robots_policy.utils import parse_url

__all__ = ("AgentGrouping", "parse_stream", "parse_text", "parse_file")

AgentGrouping = Literal["last", "shared"]

_COMMENT_RE = re.compile(r"\s*(?<!\\)#.*")
# пробелы, BOM и неразрывный пробел
_TRIM_CHARS = " \t\n\v\f\r\ufeff\xa0"
_TIME_FORMATS = ("%H%M", "%H:%M")

Source = Union[IO[bytes], IO[str], Iterable[Union[bytes, str]]]


@dataclass
class _GroupDraft:
    """Изменяемая заготовка Group на время разбора."""

    disallows: List[Matcher] = field(default_factory=list)
    allows: List[Matcher] = field(default_factory=list)
    clean_params: List[CleanParamRule] = field(default_factory=list)
    crawl_delay: float = 0.0
    visit_time: Optional[VisitTime] = None

    def to_group(self) -> Group:
        return Group(
            disallows=self.disallows,
            allows=self.allows,
            clean_params=self.clean_params,
            crawl_delay=self.crawl_delay,
            visit_time=self.visit_time,
        )


@dataclass
class _ParseContext:
    """Состояние одного вызова парсера; наружу не выходит."""

    agent_grouping: AgentGrouping
    groups: dict[str, _GroupDraft] = field(default_factory=dict)
    keys: List[str] = field(default_factory=list)
    sitemaps: dict[str, SplitResult] = field(default_factory=dict)
    host: Optional[SplitResult] = None
    # группы, к которым применяются групповые директивы
    current: List[_GroupDraft] = field(default_factory=list)
    # True, пока идут подряд строки User-agent
    collecting_agents: bool = False

    def select_agent(self, agent: str) -> None:
        group = self.groups.get(agent)
        if group is None:
            group = self.groups[agent] = _GroupDraft()
            self.keys.append(agent)
        if self.agent_grouping == "shared" and self.collecting_agents:
            if all(g is not group for g in self.current):
                self.current.append(group)
        else:
            self.current = [group]
        self.collecting_agents = True

    def build(self) -> Config:
        groups = {key: draft.to_group() for key, draft in self.groups.items()}
        return Config.build(groups, self.keys, self.sitemaps, self.host)


def parse_stream(stream: Source, *, agent_grouping: AgentGrouping = "last") -> Config:
    """Читает robots.txt из потока за один проход и возвращает Config.

    Args:
        stream: бинарный или текстовый поток либо итерируемое строк.
            Поток закрывается после разбора, даже при ошибке.
        agent_grouping: ``"last"``: директивы относятся только к последней
            строке User-agent; ``"shared"``: ко всем подряд идущим
            строкам User-agent перед ними.

    Raises:
        InvalidContentError: непустая строка без разделителя ``:``.
    """
    guard = closing(stream) if hasattr(stream, "close") else nullcontext(stream)
    with guard:
        if agent_grouping not in ("last", "shared"):
            raise ValueError(f"Unknown agent grouping: {agent_grouping!r}")
        ctx = _ParseContext(agent_grouping=agent_grouping)
        for number, raw in enumerate(_iter_lines(stream), start=1):
            line = _clean_line(raw)
            if not line:
                continue
            key, sep, value = line.partition(":")
            if not sep:
                logger.debug("Line %d has no ':' separator: %r", number, line)
                raise InvalidContentError(number, line)
            key = key.strip().lower()
            value = value.strip()
            if not _apply_main_param(ctx, key, value):
                _apply_group_param(ctx, key, value, number)

    config = ctx.build()
    logger.debug(
        "Parsed robots.txt: %d groups, %d sitemaps", len(config.groups), len(config.sitemaps)
    )
    return config


def parse_text(text: str, *, agent_grouping: AgentGrouping = "last") -> Config:
    """Разбирает robots.txt, уже загруженный в строку."""
    return parse_stream(io.StringIO(text), agent_grouping=agent_grouping)


def parse_file(path: Union[str, Path], *, agent_grouping: AgentGrouping = "last") -> Config:
    """Открывает файл в бинарном режиме и разбирает его."""
    return parse_stream(Path(path).open("rb"), agent_grouping=agent_grouping)


def _iter_lines(stream: Source) -> Iterator[str]:
    for raw in stream:
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8", errors="replace")
        yield raw


def _clean_line(raw: str) -> str:
    line = _COMMENT_RE.sub("", raw, count=1).replace("\\#", "#")
    return line.strip(_TRIM_CHARS)


def _apply_main_param(ctx: _ParseContext, key: str, value: str) -> bool:
    """Обрабатывает директивы вне групп; возвращает False для групповых."""
    if key == "sitemap":
        parsed = parse_url(value)
        if parsed is not None:
            ctx.sitemaps[value] = parsed
    elif key == "host":
        parsed = parse_url(value, netloc_only=True)
        if parsed is not None:
            ctx.host = parsed
    elif key in ("user-agent", "useragent"):
        agent = value.lower()
        if agent:
            ctx.select_agent(agent)
        else:
            logger.debug("Empty User-agent value, following directives are ignored")
            ctx.current = []
            ctx.collecting_agents = False
    else:
        return False
    return True


def _apply_group_param(ctx: _ParseContext, key: str, value: str, number: int) -> None:
    handler = _GROUP_HANDLERS.get(key)
    if handler is None:
        logger.debug("Line %d: unsupported directive %r ignored", number, key)
        return
    if not ctx.current:
        logger.debug("Line %d: %r outside of any user-agent group, skipped", number, key)
        return
    ctx.collecting_agents = False
    for group in ctx.current:
        handler(group, value)


def _set_crawl_delay(group: _GroupDraft, value: str) -> None:
    group.crawl_delay = _parse_float(value)


def _set_request_rate(group: _GroupDraft, value: str) -> None:
    # явный Crawl-delay, указанный раньше, имеет приоритет
    delay = _parse_request_rate(value)
    if delay is not None and group.crawl_delay == 0:
        group.crawl_delay = delay


def _set_visit_time(group: _GroupDraft, value: str) -> None:
    start, _, end = value.partition("-")
    group.visit_time = VisitTime(_parse_time(start), _parse_time(end))


def _add_clean_param(group: _GroupDraft, value: str) -> None:
    group.clean_params.append(_parse_clean_param(value))


def _add_allow(group: _GroupDraft, value: str) -> None:
    if value:
        group.allows.append(compile_pattern(value))


def _add_disallow(group: _GroupDraft, value: str) -> None:
    # пустой Disallow разрешает все, правило не добавляется
    if value:
        group.disallows.append(compile_pattern(value))


_GROUP_HANDLERS: dict[str, Callable[[_GroupDraft, str], None]] = {
    "crawl-delay": _set_crawl_delay,
    "crawldelay": _set_crawl_delay,
    "request-rate": _set_request_rate,
    "requestrate": _set_request_rate,
    "visit-time": _set_visit_time,
    "visittime": _set_visit_time,
    "clean-param": _add_clean_param,
    "cleanparam": _add_clean_param,
    "allow": _add_allow,
    "disallow": _add_disallow,
}


def _parse_float(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        return 0.0


def _parse_int(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return 0


def _parse_request_rate(value: str) -> Optional[float]:
    """``count/period`` -> ``period // count`` секунд; None, если count некорректен."""
    count_str, sep, period_str = value.partition("/")
    if not sep:
        return None
    count = _parse_int(count_str)
    if count <= 0:
        return None
    return float(_parse_int(period_str) // count)


def _parse_time(value: str) -> time:
    value = value.strip()
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    return time(0, 0)


def _parse_clean_param(value: str) -> CleanParamRule:
    parts = value.split(None, 1)
    params = parts[0] if parts else ""
    pattern = parts[1].strip() if len(parts) > 1 else "/"
    return CleanParamRule(
        pattern=compile_pattern(pattern),
        params=tuple(p for p in params.split("&") if p),
    )
