"""
HTML confirmation page for the resolved invitations.

One numbered entry per invitation with its contacts and WhatsApp links,
followed by the names that were skipped or not found.

The page is editable in the browser. The guest names and the message
template of each invitation can be changed, which refreshes the preview
and rebuilds the wa.me links. An invitation can be skipped and unskipped.
Opened links, edited names and skipped invitations are kept in
localStorage, so they survive a reload.
"""

from html import escape
from pathlib import Path
from typing import List, Sequence

from .messages import Invitation, confidence_level
from .normalize import phone_digits
from .resolver import SkipReason, SkipRecord

PAGE_TITLE = "WhatsApp Invitations"

STYLE = """
body { font-family: Arial, sans-serif; margin: 20px; }
.invitation { margin-bottom: 20px; padding: 10px; border: 1px solid #ddd; }
.opened { color: #888; text-decoration: line-through; }
a { color: #007bff; text-decoration: none; }
a:hover { text-decoration: underline; }
.contact { margin: 5px 0; }
.original-name { color: #666; font-style: italic; }
.group-names { margin: 10px 0; }
.name-input { width: 300px; margin: 5px 0; padding: 5px; }
.message-textarea { width: 100%; margin: 10px 0; padding: 5px; min-height: 100px; font-family: inherit; resize: vertical; }
.preview { margin: 5px 0; padding: 5px; background: #f5f5f5; white-space: pre-wrap; }
.confidence { display: inline-block; padding: 2px 6px; border-radius: 3px; font-size: 0.8em; margin-left: 10px; }
.confidence.high { background-color: #d4edda; color: #155724; }
.confidence.medium { background-color: #fff3cd; color: #856404; }
.confidence.low { background-color: #f8d7da; color: #721c24; }
.skip-button { margin-left: 10px; padding: 2px 6px; border-radius: 3px; background-color: #f8d7da; color: #721c24; border: 1px solid #f5c6cb; cursor: pointer; }
.skip-button:hover { background-color: #f5c6cb; }
.skipped-flag { display: inline-block; padding: 2px 6px; border-radius: 3px; font-size: 0.8em; background-color: #f8d7da; color: #721c24; }
.skipped-invitation { background-color: #f8f9fa; }
.skipped-content { display: none; }
.skipped-invitation .invitation-content { display: none; }
.skipped-invitation .skipped-content { display: block; }
.skipped { margin-top: 40px; padding-top: 20px; border-top: 2px solid #ddd; }
.skipped ul { list-style-type: none; padding-left: 0; }
.skipped li { margin: 5px 0; color: #888; }
"""

SCRIPT = """
function loadStored(key, fallback) {
    const value = localStorage.getItem(key);
    return value ? JSON.parse(value) : fallback;
}

function store(key, value) {
    localStorage.setItem(key, JSON.stringify(value));
}

function invitationKey(invitation) {
    return invitation.querySelector('.original-group-name').textContent;
}

function linkKey(link) {
    return invitationKey(link.closest('.invitation')) + '|' + link.dataset.phone;
}

function fillTemplate(template, names) {
    const placeholder = template.includes('{names}') ? '{names}' : '{name}';
    return template.split(placeholder).join(names);
}

function updateLink(textarea, index) {
    const invitation = document.getElementById('invitation-' + index);
    const names = invitation.querySelector('.name-input').value;
    const message = fillTemplate(textarea.value, names);
    invitation.querySelector('.preview').textContent = message;
    invitation.querySelectorAll('.whatsapp-link').forEach(link => {
        link.href = 'https://wa.me/' + link.dataset.phone + '?text=' + encodeURIComponent(message);
    });
}

function updateNames(input, index) {
    const invitation = document.getElementById('invitation-' + index);
    const editedNames = loadStored('editedNames', {});
    editedNames[invitationKey(invitation)] = input.value;
    store('editedNames', editedNames);
    updateLink(invitation.querySelector('.message-textarea'), index);
}

function skipInvitation(index) {
    const invitation = document.getElementById('invitation-' + index);
    const key = invitationKey(invitation);
    let skipped = loadStored('skippedInvitations', []);
    const button = invitation.querySelector('.skip-button');
    if (skipped.includes(key)) {
        skipped = skipped.filter(k => k !== key);
        invitation.classList.remove('skipped-invitation');
        button.textContent = 'Skip';
    } else {
        skipped.push(key);
        invitation.classList.add('skipped-invitation');
        button.textContent = 'Unskip';
    }
    store('skippedInvitations', skipped);
}

function markAsOpened(link) {
    const opened = loadStored('openedLinks', []);
    const key = linkKey(link);
    if (!opened.includes(key)) {
        opened.push(key);
        store('openedLinks', opened);
    }
    link.classList.add('opened');
}

document.addEventListener('DOMContentLoaded', () => {
    const opened = loadStored('openedLinks', []);
    const editedNames = loadStored('editedNames', {});
    const skipped = loadStored('skippedInvitations', []);

    document.querySelectorAll('.invitation').forEach(invitation => {
        const index = invitation.id.split('-')[1];
        const key = invitationKey(invitation);
        invitation.querySelectorAll('.whatsapp-link').forEach(link => {
            if (opened.includes(linkKey(link))) {
                link.classList.add('opened');
            }
        });
        if (skipped.includes(key)) {
            invitation.classList.add('skipped-invitation');
            invitation.querySelector('.skip-button').textContent = 'Unskip';
        }
        if (key in editedNames) {
            invitation.querySelector('.name-input').value = editedNames[key];
            updateLink(invitation.querySelector('.message-textarea'), index);
        }
    });
});
"""


def _render_invitation(index: int, invitation: Invitation) -> str:
    contacts = []
    for link in invitation.links:
        level = confidence_level(link.confidence)
        contacts.append(
            f'<div class="contact">'
            f'<span class="original-name">{escape(link.query)}</span> &rarr; '
            f'<strong>{escape(link.contact_name)}</strong>'
            f'<span class="confidence {level}">{round(link.confidence * 100)}% match</span> '
            f'<span class="phone">{escape(link.phone)}</span> '
            f'<a class="whatsapp-link" href="{escape(link.url)}" data-phone="{phone_digits(link.phone)}" '
            f'target="_blank" onclick="markAsOpened(this)">Open WhatsApp</a>'
            f'</div>'
        )
    kind = "group" if invitation.is_group else "individual"
    # invitations built without a template edit their filled message
    template = invitation.template or invitation.message
    return (
        f'<li class="invitation {kind}" id="invitation-{index}">'
        f'<h2>Invitation {index + 1}: {escape(invitation.title)}</h2>'
        f'<span class="original-group-name" hidden>{escape(invitation.title)}</span>'
        f'<div class="group-names">'
        f'<input type="text" class="name-input" value="{escape(invitation.title)}" '
        f'oninput="updateNames(this, {index})" placeholder="Edit guest names">'
        f'<button type="button" class="skip-button" onclick="skipInvitation({index})">Skip</button>'
        f'</div>'
        f'<div class="skipped-content"><span class="skipped-flag">Skipped</span></div>'
        f'<div class="invitation-content">'
        + "".join(contacts)
        + f'<textarea class="message-textarea" oninput="updateLink(this, {index})">'
        f'{escape(template)}</textarea>'
        f'<div class="preview">{escape(invitation.message)}</div>'
        f'</div>'
        f'</li>'
    )


def _render_name_list(title: str, names: List[str]) -> str:
    items = "".join(f"<li>{escape(name)}</li>" for name in names)
    return f"<h2>{escape(title)}</h2><ul>{items}</ul>"


def render_html(invitations: Sequence[Invitation], skipped: Sequence[SkipRecord]) -> str:
    body = [f"<h1>{PAGE_TITLE}</h1>", "<ol>"]
    body.extend(_render_invitation(i, inv) for i, inv in enumerate(invitations))
    body.append("</ol>")

    if skipped:
        user_skipped = [s.name for s in skipped if s.reason is SkipReason.USER_SKIPPED]
        not_found = [s.name for s in skipped if s.reason is SkipReason.NO_MATCHES]
        body.append('<div class="skipped">')
        body.append(_render_name_list("Skipped Names", user_skipped))
        body.append(_render_name_list("Not Found Names", not_found))
        body.append("</div>")

    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{PAGE_TITLE}</title>\n"
        f"<style>{STYLE}</style>\n"
        f"<script>{SCRIPT}</script>\n"
        "</head>\n<body>\n"
        + "\n".join(body)
        + "\n</body>\n</html>\n"
    )


def write_html(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(content)
    return path
