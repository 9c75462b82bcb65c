from .adapter import build_chat_turn, build_workflow_run
from .client import ProviderClient
from .extractor import Extracted, ParseFailure, extract
from .schemas import ChatTurn, ProviderReply, SetupProfile, WorkflowRun

__all__ = [
    "build_chat_turn",
    "build_workflow_run",
    "ProviderClient",
    "Extracted",
    "ParseFailure",
    "extract",
    "ChatTurn",
    "ProviderReply",
    "SetupProfile",
    "WorkflowRun",
]
