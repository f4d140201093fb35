"""
HTML dashboard: feedback grouped by escalation level with simple counts.
"""

from flask import render_template_string

from src.models import ESCALATION_LEVELS, FeedbackRecord

# Card colours per level: background, border, explanation text
LEVEL_COLORS = {
    "RED": {"bg": "#fee2e2", "border": "#ef4444", "text": "#991b1b"},
    "YELLOW": {"bg": "#fef3c7", "border": "#f59e0b", "text": "#92400e"},
    "GREEN": {"bg": "#d1fae5", "border": "#10b981", "text": "#065f46"},
}

SECTIONS = [
    # (level, css class, stat label, section title, empty message)
    ("RED", "red", "Critical (RED)", "🔴 Critical Issues", "No critical issues"),
    ("YELLOW", "yellow", "Important (YELLOW)", "🟡 Important Issues", "No important issues"),
    ("GREEN", "green", "Low Priority (GREEN)", "🟢 Low Priority", "No low priority items"),
]


def group_by_level(items: list[FeedbackRecord]) -> dict[str, list[FeedbackRecord]]:
    """Split feedback into one list per escalation level, keeping order."""
    grouped = {level: [] for level in ESCALATION_LEVELS}
    for item in items:
        if item["escalation_level"] in grouped:
            grouped[item["escalation_level"]].append(item)
    return grouped


def count_easy_wins(grouped: dict[str, list[FeedbackRecord]]) -> int:
    return sum(1 for items in grouped.values() for item in items if item["easy_win"] == 1)


# Jinja autoescapes everything below, feedback text included
DASHBOARD_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Feedback Pulse Dashboard</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Oxygen, Ubuntu, Cantarell, sans-serif;
            background: #f5f5f5;
            color: #333;
            line-height: 1.6;
        }
        .header {
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            color: white;
            padding: 2rem;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }
        .header h1 { font-size: 2rem; margin-bottom: 0.5rem; }
        .header p { opacity: 0.9; }
        .container { max-width: 1400px; margin: 0 auto; padding: 2rem; }
        .stats {
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(200px, 1fr));
            gap: 1rem;
            margin-bottom: 2rem;
        }
        .stat-card {
            background: white;
            padding: 1.5rem;
            border-radius: 8px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }
        .stat-card h3 {
            font-size: 0.875rem;
            text-transform: uppercase;
            color: #666;
            margin-bottom: 0.5rem;
        }
        .stat-card .number { font-size: 2rem; font-weight: bold; }
        .stat-card.red .number { color: #ef4444; }
        .stat-card.yellow .number { color: #f59e0b; }
        .stat-card.green .number, .stat-card.easy-wins .number { color: #10b981; }
        .section { margin-bottom: 3rem; }
        .section-header {
            display: flex;
            align-items: center;
            justify-content: space-between;
            margin-bottom: 1rem;
        }
        .section-title { font-size: 1.5rem; font-weight: bold; }
        .section-title.red { color: #ef4444; }
        .section-title.yellow { color: #f59e0b; }
        .section-title.green { color: #10b981; }
        .count-badge {
            background: #e5e7eb;
            padding: 0.25rem 0.75rem;
            border-radius: 12px;
            font-size: 0.875rem;
        }
        .feedback-grid { display: grid; gap: 1rem; }
        .feedback-card {
            padding: 1.5rem;
            border-radius: 8px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
            position: relative;
        }
        .feedback-card.easy-win {
            border: 2px solid #10b981;
            box-shadow: 0 0 0 3px rgba(16, 185, 129, 0.1);
        }
        .easy-win-badge {
            position: absolute;
            top: 1rem;
            right: 1rem;
            background: #10b981;
            color: white;
            padding: 0.25rem 0.75rem;
            border-radius: 12px;
            font-size: 0.75rem;
            font-weight: bold;
        }
        .feedback-text { font-size: 1rem; margin-bottom: 0.75rem; font-weight: 500; }
        .explanation { font-size: 0.875rem; margin-bottom: 1rem; font-style: italic; }
        .meta { display: flex; justify-content: space-between; font-size: 0.75rem; color: #666; }
        .empty-state {
            text-align: center;
            padding: 3rem;
            color: #999;
            background: white;
            border-radius: 8px;
        }
        @media (max-width: 768px) {
            .container { padding: 1rem; }
            .stats { grid-template-columns: 1fr; }
        }
    </style>
</head>
<body>
    <div class="header">
        <h1>📊 Feedback Pulse Dashboard</h1>
        <p>AI-powered feedback classification and prioritization</p>
    </div>
    <div class="container">
        <div class="stats">
            {% for level, css, label, title, empty in sections %}
            <div class="stat-card {{ css }}">
                <h3>{{ label }}</h3>
                <div class="number">{{ grouped[level]|length }}</div>
            </div>
            {% endfor %}
            <div class="stat-card easy-wins">
                <h3>Easy Wins</h3>
                <div class="number">{{ easy_wins }}</div>
            </div>
        </div>

        {% for level, css, label, title, empty in sections %}
        {% set colors = colors_by_level[level] %}
        <div class="section">
            <div class="section-header">
                <h2 class="section-title {{ css }}">{{ title }}</h2>
                <span class="count-badge">{{ grouped[level]|length }} items</span>
            </div>
            <div class="feedback-grid">
                {% for item in grouped[level] %}
                <div class="feedback-card{% if item.easy_win == 1 %} easy-win{% endif %}" style="background: {{ colors.bg }}; border-left: 4px solid {{ colors.border }};">
                    {% if item.easy_win == 1 %}<div class="easy-win-badge">🎯 Easy Win</div>{% endif %}
                    <div class="feedback-text">{{ item.feedback_text }}</div>
                    <div class="explanation" style="color: {{ colors.text }};">{{ item.explanation }}</div>
                    <div class="meta">
                        <span class="id">#{{ item.id }}</span>
                        <span class="date">{{ item.created_at }} UTC</span>
                    </div>
                </div>
                {% else %}
                <div class="empty-state">{{ empty }}</div>
                {% endfor %}
            </div>
        </div>
        {% endfor %}
    </div>
</body>
</html>"""


def render_dashboard(items: list[FeedbackRecord]) -> str:
    """Render the dashboard page. Needs a Flask app context."""
    grouped = group_by_level(items)
    return render_template_string(
        DASHBOARD_TEMPLATE,
        grouped=grouped,
        easy_wins=count_easy_wins(grouped),
        sections=SECTIONS,
        colors_by_level=LEVEL_COLORS,
    )
