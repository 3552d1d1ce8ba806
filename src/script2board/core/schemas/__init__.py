# -*- coding: utf-8 -*-
from .shot import COVER_SHOT_NUMBER, ShotRecord, new_shot_id
from .task import STEP_STATUSES, STEP_TYPES, Task, WorkflowStep

__all__ = [
	"COVER_SHOT_NUMBER",
	"ShotRecord",
	"new_shot_id",
	"STEP_STATUSES",
	"STEP_TYPES",
	"Task",
	"WorkflowStep",
]
