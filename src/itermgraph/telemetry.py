"""Telemetry - 日志与指标

日志: 标准 logging，消息前缀 [module:pane[:8]]
指标: 进程内计数器与 gauge
    计数器: transport.calls{op}, transport.errors{op},
            resolve.ok{policy}, resolve.not_found{policy}, resolve.variable_reads
    gauge:  snapshot.windows, snapshot.panes, resolve.panes_read
"""

import logging

from . import config

_LOG_FORMAT = "[%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """按模块名获取 logger（传入 __name__）"""
    return logging.getLogger(name)


def configure_logging(level: str | None = None) -> None:
    """配置根 logger，只在 demo 入口调用

    Args:
        level: 日志级别，缺省为 config.LOG_LEVEL
    """
    logging.basicConfig(level=(level or config.LOG_LEVEL).upper(), format=_LOG_FORMAT)


def format_pane_log(module: str, pane_id: str, msg: str) -> str:
    """拼出 "[module:pane_id 前 8 位] msg"，空 pane_id 记为 unknown"""
    pane_short = pane_id[:8] if pane_id else "unknown"
    return f"[{module}:{pane_short}] {msg}"


class Metrics:
    """进程内指标

    计数器只增不减；gauge 记录最近一次的值。标签按 key 排序后拼进指标名，
    形如 transport.calls{op=focus_request}。
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._counters: dict[str, int] = {}
        self._gauges: dict[str, float] = {}

    @staticmethod
    def _key(name: str, labels: dict[str, str] | None) -> str:
        if not labels:
            return name
        rendered = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{rendered}}}"

    def inc(self, name: str, labels: dict[str, str] | None = None, value: int = 1) -> None:
        """计数器加 value

        Args:
            name: 指标名，如 "resolve.ok"
            labels: 标签，如 {"policy": "tmux"}
            value: 增量
        """
        if self.enabled:
            key = self._key(name, labels)
            self._counters[key] = self._counters.get(key, 0) + value

    def gauge(self, name: str, value: float, labels: dict[str, str] | None = None) -> None:
        """覆盖 gauge 的当前值"""
        if self.enabled:
            self._gauges[self._key(name, labels)] = value

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        return self._counters.get(self._key(name, labels), 0)

    def get_gauge(self, name: str, labels: dict[str, str] | None = None) -> float:
        return self._gauges.get(self._key(name, labels), 0.0)

    def reset(self) -> None:
        """清空全部指标（测试用）"""
        self._counters.clear()
        self._gauges.clear()


metrics = Metrics(enabled=config.METRICS_ENABLED)
