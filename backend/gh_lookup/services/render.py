from html import escape
from typing import List

from ..schemas import LookupState, Mode, RepoResult, UserResult

PAGE_TITLE = "GitHub Lookup"

_SCRIPT = """
const form = document.getElementById("lookup-form");
const nameInput = document.getElementById("name");
const modeSelect = document.getElementById("mode");
let fieldQueue = Promise.resolve();
let fieldSeq = 0;

async function postJson(url, body) {
  const resp = await fetch(url, {
    method: "POST",
    headers: {"Content-Type": "application/json"},
    body: body === undefined ? undefined : JSON.stringify(body),
  });
  return resp.json();
}

function sendField(field, value) {
  const seq = ++fieldSeq;
  // field requests go out one at a time, in input order
  fieldQueue = fieldQueue.then(async () => {
    const state = await postJson("/api/field", {field: field, value: value});
    if (seq !== fieldSeq) {
      return;
    }
    const message = document.getElementById("input-error");
    message.textContent = state.input_error || "";
    message.hidden = !state.input_error;
    if (field === "name" && state.input_error) {
      nameInput.value = state.query.name;
    }
  }).catch(() => {});
  return fieldQueue;
}

async function waitForSettlement() {
  for (;;) {
    const resp = await fetch("/api/state");
    const state = await resp.json();
    if (!state.request.loading) {
      window.location.reload();
      return;
    }
    await new Promise((resolve) => setTimeout(resolve, 500));
  }
}

nameInput.addEventListener("input", (event) => sendField("name", event.target.value));
modeSelect.addEventListener("change", (event) => sendField("mode", event.target.value));
form.addEventListener("submit", async (event) => {
  event.preventDefault();
  await fieldQueue;
  await postJson("/api/submit", {name: nameInput.value, mode: modeSelect.value});
  window.location.reload();
});
if (document.getElementById("loading")) {
  waitForSettlement();
}
"""


def render_user(user: UserResult) -> str:
    return (
        "<section id=\"user-result\"><p>User</p><ul>"
        f"<li>Login: {escape(user.login)}</li>"
        f"<li>Public repositories: {user.public_repo_count}</li>"
        "</ul></section>"
    )


def render_repo(repo: RepoResult) -> str:
    return (
        "<section id=\"repo-result\"><p>Repo</p><ul>"
        f"<li>Name: {escape(repo.name)}</li>"
        f"<li>Stars: {repo.star_count}</li>"
        "</ul></section>"
    )


def render_form(state: LookupState) -> str:
    parts: List[str] = ['<form id="lookup-form" action="" method="post">']
    error = state.input_error or ""
    hidden = "" if error else " hidden"
    parts.append(f'<p id="input-error"{hidden}>{escape(error)}</p>')
    parts.append(
        f'<input type="text" id="name" name="name" value="{escape(state.query.name, quote=True)}">'
    )
    parts.append('<select id="mode" name="mode">')
    for mode in Mode:
        selected = " selected" if mode is state.query.mode else ""
        parts.append(f'<option value="{mode.value}"{selected}>{mode.value}</option>')
    parts.append("</select>")
    parts.append('<button type="submit">Submit</button>')
    parts.append("</form>")
    return "".join(parts)


def render_page(state: LookupState) -> str:
    """Render the whole form page for the given state.

    The regions are emitted in display order: form, loading indicator, fetch
    error, user block, repo block. Both result blocks are shown when both
    slots are filled.
    """
    body: List[str] = [render_form(state)]
    if state.request.loading:
        body.append('<p id="loading">Loading...</p>')
    if state.request.error:
        body.append(f'<p id="fetch-error">{escape(state.request.error)}</p>')
    if state.user_result:
        body.append(render_user(state.user_result))
    if state.repo_result:
        body.append(render_repo(state.repo_result))
    return (
        "<!DOCTYPE html>"
        f"<html><head><meta charset=\"utf-8\"><title>{PAGE_TITLE}</title></head>"
        f"<body>{''.join(body)}<script>{_SCRIPT}</script></body></html>"
    )
