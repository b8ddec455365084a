"""Bundled default page templates."""

from pathlib import Path

from templating import ENTRY_TEMPLATE, RESULTS_TEMPLATE, SEARCH_TEMPLATE

# Template content
STYLE = """<style>
:root{--bg:#0f1115;--fg:#e5e7eb;--muted:#a1a1aa;--card:#111318;--brand:#7aa2ff}
*{box-sizing:border-box}body{margin:0;background:var(--bg);color:var(--fg);font:15px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Helvetica,Arial}
a{color:var(--brand);text-decoration:none}.muted{color:var(--muted)}
.topbar{background:#0c0e13;border-bottom:1px solid #1c1f26;padding:10px;display:flex;gap:14px;align-items:center}
.topbar .brand{font-weight:700}.topbar form{margin-left:auto;display:flex;gap:6px}
.container{margin:20px auto;padding:0 14px}
.grid{display:grid;grid-template-columns:repeat(auto-fill,minmax(220px,1fr));gap:14px}
.card{background:var(--card);border:1px solid #1f2430;border-radius:12px;overflow:hidden}
.card img{width:100%;height:200px;object-fit:cover;display:block;background:#090a0d}
.card .meta{padding:8px 10px;display:flex;justify-content:space-between;gap:8px}
.fn{white-space:nowrap;overflow:hidden;text-overflow:ellipsis}
</style>"""

SEARCH_HTML = """<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>GIF Finder</title>
  """ + STYLE + """
</head>
<body>
  <header class="topbar">
    <a href="/search" class="brand">GIF Finder</a>
    <form method="get" action="/search">
      <input name="q" placeholder="cat, dog, funny" autofocus />
      <button>Search</button>
    </form>
  </header>
  <main class="container">
    <p class="muted">Search $NUM_GIF_FILES GIFs by comma-separated keywords.</p>
  </main>
</body>
</html>
"""

RESULTS_HTML = """<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>$WORDS - GIF Finder</title>
  """ + STYLE + """
</head>
<body>
  <header class="topbar">
    <a href="/search" class="brand">GIF Finder</a>
    <form method="get" action="/search">
      <input name="q" value="$WORDS" />
      <button>Search</button>
    </form>
  </header>
  <main class="container">
    <p class="muted">$NUM_RESULTS results for "$WORDS" out of $NUM_GIF_FILES GIFs.</p>
    <div class="grid">
$RESULTS
    </div>
  </main>
</body>
</html>
"""

ENTRY_HTML = """      <div class="card">
        <a href="/files/$GIF_FILENAME"><img src="/thumbs/$GIF_FILENAME" alt="$GIF_FILENAME" loading="lazy" /></a>
        <div class="meta"><span class="fn">$RESULT_NUMBER. $GIF_FILENAME</span><span class="muted">$GIF_SIZE</span></div>
      </div>"""


def ensure_assets(templates_dir: Path) -> list[Path]:
    """Write the default templates into templates_dir, keeping existing files."""
    templates_dir.mkdir(parents=True, exist_ok=True)
    files = {
        templates_dir / ENTRY_TEMPLATE: ENTRY_HTML,
        templates_dir / RESULTS_TEMPLATE: RESULTS_HTML,
        templates_dir / SEARCH_TEMPLATE: SEARCH_HTML,
    }
    written = []
    for p, content in files.items():
        if not p.exists():
            p.write_text(content, encoding="utf-8")
            written.append(p)
    return written
