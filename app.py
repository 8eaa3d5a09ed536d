import streamlit as st
import pandas as pd
import altair as alt

from baby_calendar.config import Settings
from baby_calendar.errors import BabyCalendarError
from baby_calendar.pipeline import run_pipeline
from baby_calendar.source import fetch_rows, parse_standard_rows

# -------------------------------------------------------
# Streamlit UI
# Run: streamlit run app.py
# -------------------------------------------------------

settings = Settings()

st.title("Baby Calendar")

st.markdown(
    """
Load the baby log from a published JSON URL, or paste it in the standard format:

Mar 11, 2025 - 5:48 AM: took 90

Wake-ups close the sleep before them and feeds within an hour fold together.
Press **Refresh** to re-read the log.
"""
)

default_data = """Mar 5, 2025 - 9:19 AM: took 90
Mar 5, 2025 - 9:40 AM: took 30
Mar 5, 2025 - 10:06 AM: Poopy diaper
Mar 5, 2025 - 10:30 AM: Sleeping
Mar 5, 2025 - 11:58 AM: Wake up
Mar 5, 2025 - 12:10 PM: took 120
Mar 5, 2025 - 1:38 PM: Sleeping
Mar 5, 2025 - 3:19 PM: Wake up
Mar 5, 2025 - 3:25 PM: took 100
Mar 5, 2025 - 11:40 PM: Sleeping
Mar 6, 2025 - 6:12 AM: Wake up
Mar 6, 2025 - 6:17 AM: took 110
"""

source = st.radio("Source", ["Paste", "URL"], horizontal=True)
if source == "URL":
    log_url = st.text_input("Log URL", value=settings.log_url or "")
else:
    baby_data = st.text_area("Baby Data", value=default_data, height=300)

settings.skip_invalid_rows = st.checkbox("Skip rows with unreadable timestamps", value=settings.skip_invalid_rows)

if st.button("Refresh") or "result" not in st.session_state:
    try:
        if source == "URL":
            rows = fetch_rows(log_url, timeout=settings.request_timeout_s) if log_url else []
        else:
            rows = parse_standard_rows(baby_data)
        st.session_state["result"] = run_pipeline(rows, settings)
    except BabyCalendarError as e:
        st.session_state.pop("result", None)
        st.error(f"{type(e).__name__}: {e}")

result = st.session_state.get("result")

if result is not None:
    if result.prediction is not None:
        st.info(f"💤 {result.prediction.start:%b %d %I:%M %p}: {result.prediction.advisory_text}")

    events_df = result.events_frame()
    if events_df.empty:
        st.info("No events logged yet.")
    else:
        # List-day view with a "jump to date" picker.
        days = sorted({e.start.date() for e in result.events})
        day = st.date_input("Jump to date", value=days[-1], min_value=days[0], max_value=days[-1])
        timed = events_df[events_df["allDay"] != True].copy()  # noqa: E712
        timed["day"] = pd.to_datetime(timed["start"]).dt.date
        timed["end_day"] = pd.to_datetime(timed["end"]).dt.date
        day_rows = timed[(timed["day"] == day) | (timed["end_day"] == day)]
        all_day = events_df[(events_df["allDay"] == True) & (events_df["start"] == day.isoformat())]  # noqa: E712

        st.subheader(day.strftime("%A, %b %d %Y"))
        for title in all_day["title"]:
            st.markdown(f"**all-day** · {title}")
        if day_rows.empty:
            st.write("Nothing logged on this day.")
        else:
            display = day_rows[["start", "end", "title"]].copy()
            display["start"] = pd.to_datetime(display["start"]).dt.strftime("%I:%M %p")
            display["end"] = pd.to_datetime(display["end"]).dt.strftime("%I:%M %p").fillna("")
            st.dataframe(display.rename(columns={"start": "Start", "end": "End", "title": "Event"}), hide_index=True)

    summary_df = result.summary_frame()
    if not summary_df.empty:
        st.subheader("Daily Summary")
        st.dataframe(summary_df.drop(columns=["Sleep Minutes"]), hide_index=True)

        # Melt into long form, one bar group per day.
        chart_data = summary_df.melt(
            id_vars=["Date"],
            value_vars=["Sleep Minutes", "Fed"],
            var_name="Measure",
            value_name="Value",
        )
        chart_data["DayString"] = pd.to_datetime(chart_data["Date"]).dt.strftime("%b %-d")
        unique_days = [d.strftime("%b %-d") for d in summary_df["Date"]]

        chart = (
            alt.Chart(chart_data)
            .mark_bar()
            .encode(
                x=alt.X("DayString:N", sort=unique_days, axis=alt.Axis(labelAngle=-45)),
                xOffset=alt.X("Measure:N"),
                y=alt.Y("Value:Q", title="Minutes slept / amount fed"),
                color=alt.Color("Measure:N", title="Measure"),
                tooltip=["DayString", "Measure", "Value"],
            )
            .properties(width=600)
            .interactive()
        )
        st.subheader("Sleep and Feeding per Day")
        st.altair_chart(chart, use_container_width=True)
