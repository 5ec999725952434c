"""JXA snippets that turn native OmniFocus objects into plain records.

Each snippet defines one function (``mapTask``, ``mapProject``, ``mapFolder``,
``mapTag``) whose output matches the ``from_dict`` input of the corresponding
model in :mod:`.data_models`.  Properties are read as methods (``t.name()``)
because JXA exposes the scripting dictionary that way.
"""

TASK_MAPPER = r"""
function mapTask(t) {
  var noteVal = t.note();
  var noteStr = noteVal ? String(noteVal) : "";

  var dueDate = t.dueDate();
  var deferDate = t.deferDate();
  var plannedDate = null;
  try {
    plannedDate = t.plannedDate ? t.plannedDate() : null;
  } catch(e) {}
  var containingProj = t.containingProject();
  var tagsList = t.tags();

  var repetitionRule = null;
  var repetitionMethod = null;
  try {
    var repRule = t.repetitionRule();
    if (repRule) {
      repetitionRule = String(repRule);
    }
    var repMethod = t.repetitionMethod();
    if (repMethod) {
      repetitionMethod = String(repMethod);
    }
  } catch(e) {}

  var parentTaskId = null;
  var parentTaskName = null;
  try {
    var parentTask = t.parentTask();
    if (parentTask) {
      parentTaskId = parentTask.id();
      parentTaskName = parentTask.name();
    }
  } catch(e) {}

  var childTaskCount = 0;
  try {
    childTaskCount = t.tasks().length;
  } catch(e) {}

  return {
    id: t.id(),
    name: t.name(),
    note: noteStr,
    completed: t.completed(),
    dropped: t.dropped(),
    flagged: t.flagged(),
    dueDate: dueDate ? dueDate.toISOString() : null,
    deferDate: deferDate ? deferDate.toISOString() : null,
    plannedDate: plannedDate ? plannedDate.toISOString() : null,
    estimatedMinutes: t.estimatedMinutes(),
    tags: tagsList.map(function(tag) { return tag.name(); }),
    projectName: containingProj ? containingProj.name() : null,
    inInbox: t.inInbox(),
    repetitionRule: repetitionRule,
    repetitionMethod: repetitionMethod,
    parentTaskId: parentTaskId,
    parentTaskName: parentTaskName,
    hasChildren: childTaskCount > 0,
    childTaskCount: childTaskCount
  };
}
"""

PROJECT_MAPPER = r"""
function mapProject(p) {
  var noteVal = p.note();
  var noteStr = noteVal ? String(noteVal) : "";

  var statusVal = p.status();
  var statusStr = statusVal ? String(statusVal) : "unknown";

  var dueDate = p.dueDate();
  var deferDate = p.deferDate();
  var folder = p.folder();

  var nextReviewDate = null;
  try {
    var nextReview = p.nextReviewDate();
    if (nextReview) {
      nextReviewDate = nextReview.toISOString();
    }
  } catch(e) {}

  return {
    id: p.id(),
    name: p.name(),
    note: noteStr,
    status: statusStr,
    completed: p.completed(),
    flagged: p.flagged(),
    dueDate: dueDate ? dueDate.toISOString() : null,
    deferDate: deferDate ? deferDate.toISOString() : null,
    folderName: folder ? folder.name() : null,
    taskCount: p.flattenedTasks().length,
    sequential: p.sequential(),
    nextReviewDate: nextReviewDate
  };
}
"""

FOLDER_MAPPER = r"""
function mapFolder(f) {
  var parentName = null;
  try {
    var pf = f.folder();
    if (pf && typeof pf.name === "function") {
      parentName = pf.name();
    }
  } catch(e) {}

  return {
    id: f.id(),
    name: f.name(),
    status: f.hidden() ? "dropped" : "active",
    projectCount: f.projects().length,
    folderCount: f.folders().length,
    parentName: parentName
  };
}
"""

# parentName stays null: JXA does not expose a reliable container for tags.
TAG_MAPPER = r"""
function mapTag(t) {
  return {
    id: t.id(),
    name: t.name(),
    status: t.hidden() ? "dropped" : "active",
    taskCount: t.tasks().length,
    allowsNextAction: t.allowsNextAction(),
    parentName: null
  };
}
"""
