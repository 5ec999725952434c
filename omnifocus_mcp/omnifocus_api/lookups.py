"""Script fragments that locate a single OmniFocus object.

Both builders expect *already sanitized* values (see
:func:`.sanitization.sanitize_input`) and emit a ``var <name> = ...;``
statement.  Lookup failures are thrown as JavaScript errors, which surface in
Python as :class:`.jxa_client.OmniFocusScriptError`.

Name lookups resolve in this order: an exact name match wins; otherwise every
case-insensitive substring match is collected and exactly one must remain.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LookupKind:
    """Describes one kind of object that can be looked up by id or name."""

    noun: str                  # "task"
    collection: str            # JXA expression returning the candidates
    id_param: str              # tool parameter callers should fall back to
    context_label: Optional[str] = None
    context_expr: Optional[str] = None  # JXA expression on `item`, may be null

    @property
    def title(self) -> str:
        return self.noun.capitalize()


TASK = LookupKind(
    noun="task",
    collection="doc.flattenedTasks()",
    id_param="taskId",
    context_label="Project",
    context_expr="item.containingProject()",
)

PROJECT = LookupKind(
    noun="project",
    collection="doc.flattenedProjects()",
    id_param="projectId",
    context_label="Folder",
    context_expr="item.folder()",
)


def find_by_id(var: str, kind: LookupKind, item_id: str) -> str:
    """Fragment binding *var* to the object whose id equals *item_id*."""
    return f"""
var {var} = {kind.collection}.find(function(item) {{ return item.id() === "{item_id}"; }});
if (!{var}) {{ throw new Error("{kind.title} not found with ID: {item_id}"); }}
"""


def _describe_candidate(kind: LookupKind) -> str:
    if not kind.context_expr:
        return 'return "- " + item.name() + " (ID: " + item.id() + ")";'
    return (
        f"var ctx = null;\n"
        f"      try {{ ctx = {kind.context_expr}; }} catch(e) {{}}\n"
        f'      return "- " + item.name() + " (ID: " + item.id() + '
        f'(ctx ? ", {kind.context_label}: " + ctx.name() : "") + ")";'
    )


def find_by_name(var: str, kind: LookupKind, name: str) -> str:
    """Fragment binding *var* to the single object matching *name*.

    Zero substring matches throws "No <kind> found ..."; several throws
    "Multiple <kind>s found ..." followed by one line per candidate with its
    id and context.
    """
    return f"""
var {var} = (function() {{
  var all = {kind.collection};
  var exact = all.find(function(item) {{ return item.name() === "{name}"; }});
  if (exact) {{ return exact; }}

  var needle = "{name}".toLowerCase();
  var matches = all.filter(function(item) {{
    return item.name().toLowerCase().indexOf(needle) !== -1;
  }});
  if (matches.length === 0) {{
    throw new Error("No {kind.noun} found matching name: {name}");
  }}
  if (matches.length > 1) {{
    var matchList = matches.map(function(item) {{
      {_describe_candidate(kind)}
    }}).join("\\n");
    throw new Error("Multiple {kind.noun}s found matching '{name}'. Please use {kind.id_param} or be more specific:\\n" + matchList);
  }}
  return matches[0];
}})();
"""


def find_by_id_or_name(
    var: str, kind: LookupKind, item_id: Optional[str], name: Optional[str]
) -> str:
    """Prefer the id lookup when both are given."""
    if item_id:
        return find_by_id(var, kind, item_id)
    if name:
        return find_by_name(var, kind, name)
    raise ValueError(f"Either {kind.id_param} or {kind.noun}Name must be provided")
