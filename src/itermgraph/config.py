"""itermgraph 配置

配置分为以下几类：
- 环境信号：继承的 session 标识
- 会话变量：tmux 桥接用到的变量名
- 并发配置：变量读取扇出上限
- 超时配置：Transport 往返超时、远程函数超时
- 日志/指标配置
"""

import os


def _env_float(name: str) -> float | None:
    value = os.environ.get(name, "")
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _env_int(name: str, default: int, minimum: int) -> int:
    try:
        value = int(os.environ.get(name, default))
    except ValueError:
        return default
    return max(value, minimum)


# === 环境信号 ===
SESSION_ID_ENV = "ITERM_SESSION_ID"  # iTerm2 注入到子进程的 session 标识（形如 w0t1p7:UUID）

# === 会话变量 ===
JOB_PID_VAR = "jobPid"  # 前台进程 pid
TMUX_PANE_VAR = "tmuxWindowPane"  # tmux pane 编号，非 tmux session 为 null
NULL_SENTINEL = "null"  # 变量未设置时 iTerm2 返回的 JSON 值

# === 并发配置 ===
VARIABLE_FANOUT_LIMIT = _env_int("ITERMGRAPH_FANOUT", 8, minimum=1)  # 同时进行的变量读取数，至少为 1

# === 超时配置 ===
TRANSPORT_TIMEOUT = _env_float("ITERMGRAPH_TIMEOUT")  # 单次往返超时（秒），None 表示不限
DEFAULT_INVOKE_TIMEOUT = -1.0  # 远程函数超时，-1 使用 iTerm2 默认值

# === 日志配置 ===
LOG_LEVEL = os.environ.get("ITERMGRAPH_LOG_LEVEL", "INFO")  # 日志级别

# === 指标配置 ===
METRICS_ENABLED = True  # 是否启用指标收集
