# File: backend/app/core/visualization/catalog_html.py
# Version: v0.2.0
"""
HTML catalog page: search bar, add-pathogen form, and one card per pathogen.

Each card shows the Cas system and every target site with its PAM,
GC% (one decimal), strand, position and length (end - start, bp).
All user-supplied values are HTML-escaped.
"""
from __future__ import annotations

from html import escape
from typing import Iterable, Optional

from backend.app.db.schemas.pathogen import Pathogen, TargetSite


def _target_html(t: TargetSite) -> str:
    length = t.end_pos - t.start_pos
    return f"""
        <div class="target">
          <div class="target-head">
            <code class="seq">{escape(t.sequence)}</code>
            <span class="pill">PAM: {escape(t.pam)}</span>
            <span class="pill">GC: {t.gc_content:.1f}%</span>
            <span class="pill strand">{escape(t.strand)}</span>
          </div>
          <div class="sub">
            <span>Position: {t.start_pos} - {t.end_pos}</span>
            <span>Length: {length} bp</span>
          </div>
        </div>"""


def render_pathogen_card(p: Pathogen) -> str:
    targets = "".join(_target_html(t) for t in p.targets)
    return f"""
      <div class="card" data-id="{escape(p.id or '')}">
        <div class="card-title">{escape(p.name)}</div>
        <div class="sub">Strain: {escape(p.strain)}</div>
        <div class="cas">
          <span class="pill cas-type">{escape(p.cas_system.type)}</span>
          <span class="sub">{escape(p.cas_system.description)}</span>
        </div>
        <h4>Target Sites ({len(p.targets)})</h4>
        {targets}
      </div>"""


_TARGET_ROW = """
        <div class="target-row">
          <input name="sequence" placeholder="Sequence (e.g., ATCGATCG...)" required/>
          <input name="pam" placeholder="PAM (e.g., NGG)" required/>
          <input name="start_pos" type="number" placeholder="Start" required/>
          <input name="end_pos" type="number" placeholder="End" required/>
          <select name="strand"><option value="+">+</option><option value="-">-</option></select>
          <input name="gc_content" type="number" step="any" placeholder="GC %" required/>
          <button type="button" class="remove-target">Remove</button>
        </div>"""

# Plain string (not an f-string): the endpoint comes from the form's data-endpoint.
_ADD_FORM_SCRIPT = """
<script>
  (function () {
    const form = document.getElementById('add-pathogen-form');
    const panel = document.getElementById('add-panel');
    const openBtn = document.getElementById('open-add-form');
    const rows = document.getElementById('target-rows');
    const template = rows.querySelector('.target-row').cloneNode(true);

    openBtn.addEventListener('click', () => { panel.hidden = false; openBtn.hidden = true; });
    document.getElementById('cancel-add-form').addEventListener('click', () => {
      panel.hidden = true; openBtn.hidden = false;
    });
    document.getElementById('add-target').addEventListener('click', () => {
      const row = template.cloneNode(true);
      row.querySelectorAll('input').forEach((el) => { el.value = ''; });
      rows.appendChild(row);
    });
    rows.addEventListener('click', (ev) => {
      if (ev.target.classList.contains('remove-target') && rows.children.length > 1) {
        ev.target.closest('.target-row').remove();
      }
    });

    form.addEventListener('submit', async (ev) => {
      ev.preventDefault();
      const value = (name) => form.elements[name].value;
      const payload = {
        name: value('name'),
        strain: value('strain'),
        cas_system: { type: value('cas_type'), description: value('cas_description') },
        targets: Array.from(rows.querySelectorAll('.target-row')).map((row) => {
          const field = (name) => row.querySelector('[name="' + name + '"]').value;
          return {
            sequence: field('sequence'),
            pam: field('pam'),
            start_pos: parseInt(field('start_pos'), 10),
            end_pos: parseInt(field('end_pos'), 10),
            strand: field('strand'),
            gc_content: parseFloat(field('gc_content')),
          };
        }),
      };
      try {
        const resp = await fetch(form.dataset.endpoint, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(payload),
        });
        if (!resp.ok) throw new Error(resp.status);
        window.location.reload();
      } catch (err) {
        console.error('Error adding pathogen:', err);
        alert('Failed to add pathogen. Please try again.');
      }
    });
  })();
</script>
"""


def render_add_form(api_prefix: str = "/api") -> str:
    """Add-pathogen form; posts JSON to <api_prefix>/pathogens and reloads on success."""
    endpoint = escape(f"{api_prefix.rstrip('/')}/pathogens")
    return f"""
    <button type="button" id="open-add-form" class="btn">Add New Pathogen</button>
    <div id="add-panel" class="card add-panel" hidden>
      <div class="card-title">Add New Pathogen</div>
      <form id="add-pathogen-form" data-endpoint="{endpoint}">
        <div class="fields">
          <input name="name" placeholder="Pathogen name (e.g., Escherichia coli)" required/>
          <input name="strain" placeholder="Strain (e.g., K-12 MG1655)" required/>
          <input name="cas_type" placeholder="Cas system type (e.g., Cas9)" required/>
          <input name="cas_description" placeholder="Cas system description" required/>
        </div>
        <h4>Target Sites</h4>
        <div id="target-rows">{_TARGET_ROW}
        </div>
        <button type="button" id="add-target">Add Target</button>
        <div class="actions">
          <button type="submit" class="btn">Add Pathogen</button>
          <button type="button" id="cancel-add-form">Cancel</button>
        </div>
      </form>
    </div>{_ADD_FORM_SCRIPT}"""


def render_catalog_page(
    pathogens: Iterable[Pathogen],
    *,
    query: str = "",
    error: Optional[str] = None,
    title: str = "CRISPR/Cas Target Database",
    api_prefix: str = "/api",
) -> str:
    pathogens = list(pathogens)

    banner = f'<div class="error">{escape(error)}</div>' if error else ""
    if pathogens:
        body = '<section class="grid">' + "".join(render_pathogen_card(p) for p in pathogens) + "</section>"
    elif not error:
        body = """
    <div class="empty">
      <p>No pathogens found.</p>
      <p class="sub">Try adjusting your search or add a new pathogen.</p>
    </div>"""
    else:
        body = ""

    return f"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8"/>
<meta name="viewport" content="width=device-width, initial-scale=1"/>
<title>{escape(title)}</title>
<style>
  :root {{
    --bg: #f5f5f7;
    --card: #ffffff;
    --text: #1d1d1f;
    --sub: #6e6e73;
    --border: #e5e5ea;
    --pill: #f2f2f7;
  }}
  * {{ box-sizing: border-box; }}
  body {{
    margin: 0; padding: 24px;
    background: var(--bg);
    color: var(--text);
    font: 14px/1.45 -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
  }}
  .wrap {{ max-width: 1100px; margin: 0 auto; }}
  h1 {{ font-weight: 700; letter-spacing: -.02em; margin: 0 0 4px 0; font-size: 22px; }}
  .sub {{ color: var(--sub); font-size: 13px; display: flex; gap: 12px; }}
  form.search {{ margin: 16px 0 20px 0; display: flex; gap: 8px; }}
  form.search input {{ flex: 1; padding: 8px 12px; border: 1px solid var(--border); border-radius: 10px; }}
  .grid {{ display: grid; gap: 14px; grid-template-columns: repeat(auto-fill, minmax(420px, 1fr)); }}
  .card {{
    background: var(--card); border: 1px solid var(--border);
    border-radius: 14px; padding: 14px; box-shadow: 0 8px 24px rgba(0,0,0,.05);
  }}
  .card-title {{ font-weight: 650; font-size: 16px; }}
  .cas {{ margin: 8px 0; }}
  .target {{ border-top: 1px solid var(--border); padding: 8px 0; }}
  .target-head {{ display: flex; gap: 6px; align-items: center; flex-wrap: wrap; }}
  .seq {{ font-family: ui-monospace, Menlo, monospace; }}
  .pill {{
    display: inline-block; padding: 2px 8px; background: var(--pill);
    border: 1px solid var(--border); border-radius: 999px; font-size: 12px;
  }}
  .error {{ padding: 12px; border: 1px solid #fecaca; background: #fef2f2; color: #b91c1c; border-radius: 10px; margin-bottom: 16px; }}
  .empty {{ text-align: center; padding: 60px 0; color: var(--sub); }}
  .add-panel {{ margin-bottom: 20px; }}
  .fields, .target-row, .actions {{ display: flex; gap: 8px; flex-wrap: wrap; margin: 6px 0; }}
  .fields input, .target-row input, .target-row select {{ padding: 6px 10px; border: 1px solid var(--border); border-radius: 8px; }}
  .btn {{ padding: 8px 14px; border-radius: 999px; border: 1px solid #b6dfff; background: #e6f5ff; color: #0b5cab; font-weight: 600; cursor: pointer; }}
</style>
</head>
<body>
  <div class="wrap">
    <header>
      <h1>{escape(title)}</h1>
      <div class="sub">CRISPR/Cas target sites for common bacterial pathogens.</div>
    </header>
    <form class="search" method="get" action="/">
      <input type="text" name="name" value="{escape(query)}"
             placeholder="Search pathogens by name (e.g., Escherichia, Staphylococcus)..."/>
      <button type="submit">Search</button>
    </form>
    {render_add_form(api_prefix)}
    {banner}
    {body}
  </div>
</body>
</html>
"""
