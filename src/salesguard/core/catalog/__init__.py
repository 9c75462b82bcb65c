from .loader import MANUAL_TRIGGER, Stage, StageCatalog, Trigger, load_catalog

__all__ = ["MANUAL_TRIGGER", "Stage", "StageCatalog", "Trigger", "load_catalog"]
