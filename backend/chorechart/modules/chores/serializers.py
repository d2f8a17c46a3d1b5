from chorechart.modules.children.models import Child
from chorechart.modules.chores.models import Chore
from chorechart.modules.chores.schemas import (
    ChoreChildOut,
    ChoreOut,
    ChoreTaskOut,
    ChoreV2Out,
    TaskPreviewOut,
)
from chorechart.modules.tasks.models import Task


def BuildTaskPreview(task: Task) -> TaskPreviewOut:
    return TaskPreviewOut(id=task.Id, name=task.Name, points=task.Points)


def BuildChoreChild(child: Child) -> ChoreChildOut:
    return ChoreChildOut(id=child.Id, name=child.Name)


def BuildChoreTask(task: Task) -> ChoreTaskOut:
    return ChoreTaskOut(id=task.Id, name=task.Name, points=task.Points)


def BuildChoreOut(chore: Chore) -> ChoreOut:
    return ChoreOut(
        id=chore.Id,
        child_id=chore.ChildId,
        task=BuildTaskPreview(chore.Task),
        due_on=chore.DueOn,
        completed=chore.IsCompleted,
    )


def BuildChoreV2Out(chore: Chore) -> ChoreV2Out:
    return ChoreV2Out(
        id=chore.Id,
        child=BuildChoreChild(chore.Child),
        task=BuildChoreTask(chore.Task),
        due_on=chore.DueOn,
        completed=chore.IsCompleted,
    )
