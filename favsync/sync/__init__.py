# favsync Sync Module
# Session gate, per-list pipeline, and the scheduling loop

from favsync.sync.directory import DirectoryChangeError, ScopedDirectory
from favsync.sync.pipeline import CollectionSyncPipeline, PipelineError
from favsync.sync.scheduler import DirectoryPreparationError, RoundResult, SchedulerState, SyncScheduler
from favsync.sync.session import CriticalFailure, SessionGate

__all__ = [
    # Directory
    "ScopedDirectory",
    "DirectoryChangeError",
    # Session
    "SessionGate",
    "CriticalFailure",
    # Pipeline
    "CollectionSyncPipeline",
    "PipelineError",
    # Scheduler
    "SyncScheduler",
    "SchedulerState",
    "RoundResult",
    "DirectoryPreparationError",
]
