from __future__ import annotations

import copy
from typing import Any

# Served verbatim whenever no review credentials are configured.
DEMO_REVIEW_RESULT: dict[str, Any] = {
    "overallScore": 72,
    "stageScores": [
        {"id": "S0", "name": "建立信任", "score": 90, "status": "success"},
        {"id": "S1", "name": "发现痛点", "score": 85, "status": "success"},
        {"id": "S2", "name": "提供价值", "score": 60, "status": "warning"},
        {"id": "S3", "name": "建立张力", "score": 40, "status": "error"},
        {"id": "S4", "name": "处理异议", "score": 70, "status": "warning"},
        {"id": "S5", "name": "促成决策", "score": 0, "status": "warning"},
    ],
    "mistakes": [
        {
            "id": "m1",
            "stage": "S3 建立张力",
            "original": "客户说现在挺好，我就说那好的打扰了。",
            "reason": "过早放弃，未尝试挑战客户的现状偏好 (Status Quo Bias) [MOCK DATA]。",
            "better_script": "理解现在运行平稳。但我很好奇，如果半年后行业法规突然调整，现有流程有Plan B吗？",
        }
    ],
}


def demo_review_result() -> dict[str, Any]:
    return copy.deepcopy(DEMO_REVIEW_RESULT)
