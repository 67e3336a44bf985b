# Insights tab: stats, weekly recap, trend charts, calendar, recurring themes.
import pandas as pd
import streamlit as st

import insights
import llm
import moods
import sentiment
import session
import summary

EMOJI = {"positive": "☺️", "neutral": "😐", "negative": "☹️"}
WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def _render_calendar(entries, t):
    days = insights.calendar_days(entries, t)
    st.markdown("**Last four weeks**")
    header_cols = st.columns(7)
    pad = (days[0]["date"].weekday() + 1) % 7
    for i, wd in enumerate(WEEKDAYS):
        with header_cols[i]:
            st.markdown(f'<p class="insights-cal-weekday">{wd}</p>', unsafe_allow_html=True)
    cells = [None] * pad + days
    while len(cells) % 7:
        cells.append(None)
    for i in range(0, len(cells), 7):
        cols = st.columns(7)
        for j, cell in enumerate(cells[i:i + 7]):
            with cols[j]:
                if cell is None:
                    st.write("")
                else:
                    em = moods.mood_emoji(cell["mood"]) if cell["has_entry"] else "·"
                    st.markdown(f"{cell['date'].day} {em}")


def render():
    state = session.get_state()
    t = session.now()
    snap = state.insights

    if snap is None:
        st.markdown("### Insights")
        st.caption("Write at least two entries to start seeing patterns here.")
        return

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Streak", f"{snap.streak} days")
    c2.metric("This week", snap.entries_this_week)
    c3.metric("Avg mood", f"{snap.avg_mood}/5")
    c4.metric("Positivity", f"{snap.avg_sentiment}%")

    st.markdown("### Your week")
    st.write(st.session_state.get("weekly_ai_text") or summary.compose_weekly_summary(state.entries, t))
    if llm.is_enabled() and st.button("Ask AI for a weekly reflection", key="ai_weekly"):
        with st.spinner("Generating…"):
            st.session_state.weekly_ai_text = llm.weekly_summary_text(state.entries, t)
        st.rerun()

    if snap.sentiment_trend:
        st.markdown("### Sentiment over time")
        trend = pd.DataFrame([p.model_dump() for p in snap.sentiment_trend])
        st.line_chart(trend, y=["sentiment", "mood"], x_label="Entry", y_label="Positivity % / mood")
        st.caption(f"{trend['display_date'].iloc[0]} to {trend['display_date'].iloc[-1]}")

    if snap.mood_distribution:
        st.markdown("### Mood distribution (30 days)")
        dist = pd.DataFrame(
            [{"mood": moods.mood_label(m), "count": c} for m, c in snap.mood_distribution.items()]
        )
        st.bar_chart(dist.set_index("mood"), y="count", x_label="Mood", y_label="Entries")

    _render_calendar(state.entries, t)
    pattern = insights.writing_time_pattern(state.entries, t)
    if pattern:
        st.caption(f"You write most often in the {pattern}.")

    st.markdown("### Recurring themes")
    st.caption("Topics that appear often in the last 30 days. Top 5 below.")
    if snap.top_themes:
        themes = pd.DataFrame([tc.model_dump() for tc in snap.top_themes])
        st.bar_chart(themes.set_index("theme"), y="count", x_label="Theme", y_label="Count")
    else:
        st.caption("Write more entries to see themes here.")

    st.markdown("### A thought for you")
    if "insight_text" not in st.session_state:
        st.session_state.insight_text = summary.local_insight()
    st.write(st.session_state.insight_text)
    if llm.is_enabled() and st.button("Personalize with AI", key="ai_insight"):
        with st.spinner("Generating…"):
            st.session_state.insight_text = llm.personalized_insight_text(state.entries, snap)
        st.rerun()

    latest = state.entries[0]
    st.caption(f"Latest entry tone: {EMOJI[sentiment.sentiment_label(latest.sentiment)]}")
