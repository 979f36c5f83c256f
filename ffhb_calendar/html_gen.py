"""HTML pages: the landing page with the URL form, and the error fragment."""

from __future__ import annotations

from html import escape


def generate_index_html(example_url: str = "") -> str:
    """Generate the landing page shown when no team URL is given."""
    example = escape(
        example_url
        or "https://www.ffhandball.fr/competitions/saison-2023-2024-19/national/"
        "nationale-1-masculine-2023-2024-23181/equipe-1797563/"
    )

    return f"""<!DOCTYPE html>
<html lang="fr">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Calendrier FFHB</title>
    <style>
        * {{ box-sizing: border-box; margin: 0; padding: 0; }}
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            max-width: 720px;
            margin: 0 auto;
            padding: 1.5rem;
            background: #0f0f1a;
            color: #e0e0e0;
            line-height: 1.6;
        }}
        h1 {{ color: #fff; margin-bottom: 0.5rem; font-size: 1.75rem; }}
        h2 {{ color: #ccc; margin: 1.5rem 0 0.75rem; font-size: 1.25rem; }}
        a {{ color: #7dd3fc; text-decoration: none; }}
        a:hover {{ text-decoration: underline; }}
        form {{
            background: #1a1a2e;
            padding: 1.25rem;
            border-radius: 8px;
            margin: 1rem 0;
        }}
        label {{ display: block; margin: 0.5rem 0 0.25rem; color: #999; font-size: 0.85rem; }}
        input {{
            width: 100%;
            background: #0a0a16;
            color: #7dd3fc;
            border: 1px solid #2a2a4a;
            border-radius: 4px;
            padding: 0.6rem 0.75rem;
            font-family: monospace;
        }}
        button {{
            margin-top: 0.75rem;
            padding: 0.5rem 1rem;
            border-radius: 6px;
            border: none;
            background: #2563eb;
            color: #fff;
            cursor: pointer;
        }}
        .url-box {{
            background: #0a0a16;
            padding: 0.6rem 0.75rem;
            border-radius: 4px;
            font-family: monospace;
            font-size: 0.85rem;
            word-break: break-all;
            color: #7dd3fc;
        }}
        .footer {{
            margin-top: 2rem;
            padding-top: 1rem;
            border-top: 1px solid #222;
            color: #666;
            font-size: 0.8rem;
        }}
    </style>
</head>
<body>
    <h1>Calendrier FFHB</h1>
    <p>Abonnez-vous au calendrier des rencontres de votre équipe de handball.</p>

    <form method="get" action="/">
        <label for="url">Lien de la page de l'équipe sur ffhandball.fr</label>
        <input id="url" name="url" type="url" required placeholder="{example}">
        <label for="title">Nom du calendrier (facultatif)</label>
        <input id="title" name="title" type="text">
        <button type="submit">Générer le calendrier</button>
    </form>

    <h2>Conditions</h2>
    <p>Le lien doit pointer vers la page d'une équipe, et contenir un segment <code>equipe-&lt;id&gt;</code> :</p>
    <div class="url-box">{example}</div>

    <div class="footer">
        <p>Données issues de <a href="https://www.ffhandball.fr" target="_blank" rel="noopener">ffhandball.fr</a>.
           Le calendrier est mis à jour au plus toutes les heures.</p>
    </div>
</body>
</html>"""


def generate_error_html(message: str, url: str) -> str:
    """Error fragment returned instead of a calendar."""
    message = escape(message)
    url = escape(url)
    return f"""
<p>Une erreur est survenue : <i>{message}</i></p>
<p>Veuillez vérifier que le lien fourni respecte bien <a href="/" target="_blank">les conditions</a> :
<a href="{url}" target="_blank">{url}</a>.</p>
<p>Vous pouvez également contacter un administrateur du site.</p>
"""
