from __future__ import annotations

from salesguard.core.catalog import Trigger

from .schemas import Script, TacticalCard

OFFLINE_TAG = "#OfflineFallback"
OFFLINE_WARNING = "当前为离线兜底模式，请检查网络或 API 配置。"
OFFLINE_GENERIC_SCRIPT = "网络似乎断开了，但我建议您先表示理解..."

PARSE_ERROR_TAG = "#Error"
PARSE_ERROR_DIAGNOSIS = "无法解析 AI 响应格式"
PARSE_ERROR_WARNING = "系统正在调整，请稍后重试"
RAW_PREVIEW_CHARS = 100


def offline_card(problem_type: str, query: str | None, trigger: Trigger | None) -> TacticalCard:
    if query and query.strip():
        diagnosis = f'(离线模式) 客户反馈: "{query}"'
    else:
        diagnosis = f"(离线模式) 客户表现出【{problem_type}】阻碍。"
    content = trigger.default_script if trigger is not None and trigger.default_script else OFFLINE_GENERIC_SCRIPT
    return TacticalCard(
        diagnosis=diagnosis,
        tags=[OFFLINE_TAG],
        scripts=[Script(type="soft", content=content)],
        warning=OFFLINE_WARNING,
        files=[],
    )


def unparseable_card(raw_answer: str) -> TacticalCard:
    return TacticalCard(
        diagnosis=PARSE_ERROR_DIAGNOSIS,
        tags=[PARSE_ERROR_TAG],
        scripts=[Script(type="soft", content=raw_answer[:RAW_PREVIEW_CHARS] + "...")],
        warning=PARSE_ERROR_WARNING,
        files=[],
    )
