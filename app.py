"""Mission Deck dashboard: satellite catalog, rental configuration, fleet and live mission view."""

from __future__ import annotations

import time
from datetime import date, datetime, timezone
from pathlib import Path

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

import config
from billing import BillingDraft, ConfigurationError
from catalog import CatalogEntry, SatelliteCatalog, load_catalog
from command_console import AVAILABLE_COMMANDS, PARAM_OPTIONS, CommandConsole, CommandError, validate_confirmation_code
from core.logging_config import setup_logging
from core.settings import RuntimeSettings
from fleet import (
    FleetItem,
    FleetStore,
    MissionStatus,
    confirm_configuration,
    days_until_start,
    hours_left,
    mission_code,
    mission_status,
    operation_days,
)
from telemetry import CommsLink, EventLog, SystemTelemetry, due_steps, ground_track
from utils.artwork import satellite_image
from utils.space_weather import fetch_space_weather, scale_color
from utils.tracking import SatellitePositions, fetch_positions, fetch_tle


PAGES = ["Services", "Satellites", "Configure", "Your Fleet", "Dashboard"]
STATUS_COLORS = {
    MissionStatus.SCHEDULED: "#FB923C",
    MissionStatus.ACTIVE: "#2DD4BF",
    MissionStatus.COMPLETED: "#60A5FA",
}
TEMPLATE = "plotly_dark"
GRID_COLOR = "rgba(148,163,184,0.18)"


@st.cache_resource
def load_settings() -> RuntimeSettings:
    settings = RuntimeSettings.from_env()
    setup_logging(settings.log_level)
    return settings


@st.cache_resource
def load_reference_catalog(path: str) -> SatelliteCatalog:
    return load_catalog(Path(path))


@st.cache_data(ttl=config.POSITIONS_REFRESH_SECONDS, show_spinner=False)
def cached_positions(norad_id: int, proxy_url: str, satname: str, timeout: float):
    return fetch_positions(norad_id, satname=satname, proxy_url=proxy_url, timeout_sec=timeout)


@st.cache_data(ttl=config.POSITIONS_REFRESH_SECONDS, show_spinner=False)
def cached_tle(norad_id: int, proxy_url: str, timeout: float):
    return fetch_tle(norad_id, proxy_url=proxy_url, timeout_sec=timeout)


@st.cache_data(ttl=600, show_spinner=False)
def cached_space_weather(timeout: float):
    return fetch_space_weather(timeout_sec=timeout)


def tracking_map(positions: SatellitePositions) -> go.Figure:
    """Geo scatter of the upcoming positions with the current one highlighted."""
    lat, lon = ground_track(positions.positions)

    fig = go.Figure()
    fig.add_trace(go.Scattergeo(lat=lat, lon=lon, mode="lines", line=dict(width=2.2, color="#2DD4BF"), name="Track"))
    fig.add_trace(
        go.Scattergeo(
            lat=[lat[0]],
            lon=[lon[0]],
            mode="markers+text",
            marker=dict(size=11, color="#F8FAFC", line=dict(width=2, color="#FB923C")),
            text=[positions.satname or str(positions.satid)],
            textposition="top center",
            name="Current",
        )
    )
    fig.update_layout(
        title="Live Satellite Tracking",
        template=TEMPLATE,
        height=320,
        margin=dict(l=6, r=6, t=40, b=6),
        paper_bgcolor="rgba(0,0,0,0)",
        showlegend=False,
        geo=dict(
            projection_type="natural earth",
            showland=True,
            landcolor="rgba(51,65,85,0.48)",
            showocean=True,
            oceancolor="rgba(2,6,23,0.88)",
            showcountries=True,
            countrycolor="rgba(148,163,184,0.22)",
            bgcolor="rgba(0,0,0,0)",
        ),
    )
    return fig


def telemetry_plot(frame: pd.DataFrame) -> go.Figure:
    colors = {"status": "#38BDF8", "signal": "#8B5CF6", "power": "#34D399", "temp": "#FB923C"}
    fig = go.Figure()
    for channel, color in colors.items():
        fig.add_trace(
            go.Scatter(x=frame["time"], y=frame[channel], mode="lines", line=dict(color=color, width=2), name=channel.title())
        )
    fig.update_layout(
        template=TEMPLATE,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        height=320,
        margin=dict(l=8, r=8, t=8, b=8),
        xaxis=dict(title="Sample", gridcolor=GRID_COLOR),
        yaxis=dict(title="Value", range=[0, 105], gridcolor=GRID_COLOR),
        legend=dict(orientation="h", yanchor="bottom", y=1.01, x=0.0),
    )
    return fig


def inject_css() -> None:
    st.markdown(
        """
<style>
.stApp {
  background: linear-gradient(145deg, #060D1A 0%, #0F172A 100%);
  color: #E2E8F0;
}
.card {
  border: 1px solid rgba(148, 163, 184, 0.25);
  background: rgba(12, 20, 34, 0.92);
  border-radius: 14px;
  padding: 14px;
  margin-bottom: 10px;
}
.card-title { font-size: 0.96rem; letter-spacing: 0.5px; color: #94A3B8; }
.value { font-family: 'JetBrains Mono', monospace; font-weight: 700; }
.status-pill {
  border-radius: 999px;
  padding: 3px 10px;
  font-size: 0.84rem;
  font-weight: 700;
  border: 1px solid currentColor;
}
</style>
""",
        unsafe_allow_html=True,
    )


def goto(page: str, **state) -> None:
    """Button callback: switch page and stash any selection for the next run."""
    for key, value in state.items():
        st.session_state[key] = value
    st.session_state.page = page


def render_services(catalog: SatelliteCatalog) -> None:
    st.header("Services")
    st.caption("Select the purpose of your project from the options listed below. It helps us provide the best options.")

    categories = catalog.categories()
    cols = st.columns(3)
    for i, category in enumerate(categories):
        count = len(catalog.satellites(category.name))
        with cols[i % 3]:
            st.markdown(
                f"<div class='card'><div class='card-title'>{category.name}</div><div class='value'>{count} satellites</div></div>",
                unsafe_allow_html=True,
            )
            st.button(
                "Browse",
                key=f"browse_{category.name}",
                disabled=count == 0,
                on_click=goto,
                args=("Satellites",),
                kwargs={"category": category.name},
            )


def cost_table(entry: CatalogEntry) -> pd.DataFrame:
    rows = [{"Orbit": orbit, "$/day": entry.cost_per_day.get(orbit, "N/A")} for orbit in config.ORBIT_TYPES]
    return pd.DataFrame(rows)


def render_satellites(catalog: SatelliteCatalog) -> None:
    category = st.session_state.get("category")
    if not category:
        st.info("Pick a service category first.")
        return

    st.header(f"{category} Satellites")
    entries = catalog.satellites(category)
    if not entries:
        st.warning("No satellites found for this category.")
        return

    for entry in entries:
        with st.container(border=True):
            left, right = st.columns([1, 1.4])
            left.image(str(satellite_image(entry)), caption=entry.name, use_container_width=True)
            with right:
                st.subheader(entry.name)
                st.write(f"**Orbit Type:** {', '.join(entry.orbit_types) or 'N/A'}")
                for attr, value in entry.specs.items():
                    st.write(f"**{attr.replace('_', ' ').title()}:** {value}")
                c1, c2 = st.columns(2)
                c1.dataframe(cost_table(entry), hide_index=True)
                c2.write(
                    "**Downlink:** "
                    + ", ".join(
                        f"{rate} {entry.downlink_data_rate.get(rate, '')} ({entry.downlink_cost_for(rate) or 'N/A'})"
                        for rate in config.DOWNLINK_RATES
                    )
                )
                c2.write(
                    f"**Fleet:** {entry.current_fleet.get('In-Orbit', '0')} in orbit, "
                    f"{entry.current_fleet.get('Scheduled', '0')} scheduled"
                )
                if entry.manufacturer:
                    c2.write(f"**Manufacturer:** {', '.join(entry.manufacturer)}")
                st.button(
                    "Configure",
                    key=f"configure_{entry.name}",
                    on_click=goto,
                    args=("Configure",),
                    kwargs={"selected_satellite": entry.name},
                )


def _draft_for(entry: CatalogEntry) -> BillingDraft:
    drafts = st.session_state.setdefault("drafts", {})
    draft = drafts.get(entry.name)
    if draft is None:
        draft = drafts[entry.name] = BillingDraft(entry=entry)
    return draft


def render_configure(catalog: SatelliteCatalog, store: FleetStore) -> None:
    name = st.session_state.get("selected_satellite")
    entry = catalog.find(name) if name else None
    if entry is None:
        st.info("Choose a satellite to configure from the catalog.")
        return

    draft = _draft_for(entry)
    st.header(f"{entry.name} Configuration")
    left, right = st.columns(2, gap="medium")

    with left:
        orbit = st.radio(
            "Orbit",
            entry.orbit_types,
            index=entry.orbit_types.index(draft.orbit) if draft.orbit in entry.orbit_types else None,
            horizontal=True,
        )
        if orbit and orbit != draft.orbit:
            draft.select_orbit(orbit)

        rate = st.radio(
            "Downlink Rate",
            config.DOWNLINK_RATES,
            index=config.DOWNLINK_RATES.index(draft.downlink_rate) if draft.downlink_rate else None,
            format_func=lambda r: f"{r} - {entry.downlink_data_rate.get(r, '')}",
            horizontal=True,
        )
        if rate and rate != draft.downlink_rate:
            draft.select_downlink_rate(rate)

    with right:
        picked = st.date_input("Rental Period", value=(), min_value=date.today(), key=f"dates_{entry.name}")
        if len(picked) == 2 and (draft.start, draft.end) != tuple(picked):
            draft.select_dates(picked[0], picked[1])

        if draft.error:
            st.error(draft.error)

        m1, m2 = st.columns(2)
        m1.metric("Duration", f"{draft.duration} days")
        m2.metric("Total Cost", f"${draft.total_cost:,.2f}")

    if st.button("Confirm Selection", type="primary"):
        try:
            item = store.add(confirm_configuration(entry, draft))
        except ConfigurationError as exc:
            st.error(str(exc))
            return
        st.session_state.drafts.pop(entry.name, None)
        st.success(f"{item.name} added to your fleet ({mission_code(item)}).")


def fleet_frame(items: list[FleetItem], now: datetime) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Mission": mission_code(item),
                "Status": mission_status(item, now).label,
                "Start": item.start_date.date(),
                "End": item.end_date.date(),
                "Total Cost": item.total_cost,
            }
            for item in items
        ]
    )


def render_fleet_card(item: FleetItem, now: datetime) -> None:
    status = mission_status(item, now)
    color = STATUS_COLORS[status]
    span = f"{item.start_date:%d %b %y} - {item.end_date:%d %b %y}"

    with st.container(border=True):
        st.markdown(
            f"<div class='card-title'>{mission_code(item)}</div>"
            f"<span class='status-pill' style='color:{color}'>{status.label}</span>",
            unsafe_allow_html=True,
        )
        c1, c2, c3 = st.columns(3)
        c2.metric("Duration", span)
        c3.metric("Total Cost", f"${item.total_cost:,.2f}")

        if status is MissionStatus.SCHEDULED:
            c1.metric("Days Until Start", days_until_start(item, now))
        elif status is MissionStatus.COMPLETED:
            c1.metric("Total Operation Time", f"{operation_days(item)} days")
        else:
            c1.metric("Time Left", f"{hours_left(item, now)}H")
            st.button("Open Dashboard", key=f"open_{item.id}", on_click=open_dashboard, args=(item,))


def open_dashboard(item: FleetItem) -> None:
    if load_store().set_active(item):
        goto("Dashboard")
    else:
        st.session_state.flash = f"No NORAD ID available for {item.name}."


def render_fleet(store: FleetStore) -> None:
    st.header("Your Fleet")
    now = datetime.now(timezone.utc)
    choice = st.selectbox("Status", ["all"] + [s.value for s in MissionStatus], format_func=str.title)
    items = store.filter(choice, now=now)

    if not items:
        st.info("No satellites match this filter.")
    else:
        st.dataframe(fleet_frame(items, now), hide_index=True, width="stretch")
        for item in items:
            render_fleet_card(item, now)

    if st.button("Clear Fleet"):
        store.clear()
        st.rerun()


def _console(norad_id: int) -> CommandConsole:
    consoles = st.session_state.setdefault("consoles", {})
    if norad_id not in consoles:
        consoles[norad_id] = CommandConsole()
    return consoles[norad_id]


def render_console(console: CommandConsole) -> None:
    st.subheader("Command Console")
    name = st.selectbox(
        "Command",
        list(AVAILABLE_COMMANDS),
        index=None,
        format_func=lambda n: AVAILABLE_COMMANDS[n].display_name,
    )
    params: dict[str, str] = {}
    if name:
        for param, kind in AVAILABLE_COMMANDS[name].params.items():
            key = f"param_{name}_{param}"
            if param in PARAM_OPTIONS:
                params[param] = st.selectbox(param, PARAM_OPTIONS[param], key=key)
            elif param == "confirmCode":
                params[param] = st.text_input("Confirmation code", max_chars=6, type="password", key=key)
                if params[param] and not validate_confirmation_code(params[param]):
                    st.error("Invalid confirmation code")
            elif kind is float:
                params[param] = str(st.number_input(param, value=0.0, key=key))
            else:
                params[param] = st.text_input(param, key=key)
        if name == "SYSTEM_REBOOT":
            st.warning("SYSTEM REBOOT WILL TERMINATE ALL ACTIVE OPERATIONS")

    b1, b2 = st.columns(2)
    if b1.button("Execute", disabled=not name):
        try:
            console.submit(name, params)
        except CommandError as exc:
            st.error(str(exc))
    if b2.button("Terminate", disabled=not console.running):
        console.terminate()

    commands = pd.DataFrame([{"#": c.id, "Command": c.type, "Status": c.status.upper()} for c in console.commands])
    if not commands.empty:
        st.dataframe(commands, hide_index=True, width="stretch")

    stats = console.log_stats()
    st.caption(f"{stats['total']} logs | {stats['warning']} warnings | {stats['error']} errors | {stats['command']} commands")
    st.code("\n".join(f"[{log.timestamp}] {log.message}" for log in console.logs[-20:]), language=None)


def render_space_weather(settings: RuntimeSettings) -> None:
    st.subheader("Space Weather")
    weather = cached_space_weather(settings.http_timeout_seconds)
    if weather is None:
        st.error(config.MSG_SPACE_WEATHER_FAILED)
        return

    for title, readings in (
        ("Observed Max", weather.observed_max),
        ("Latest Observed", weather.latest_observed),
        ("Predicted", weather.predicted),
    ):
        pills = " ".join(
            f"<span class='status-pill' style='color:{scale_color(r.text)}'>{letter}{r.scale} {r.text}</span>"
            for letter, r in readings.items()
        )
        st.markdown(f"<div class='card'><div class='card-title'>{title}</div>{pills}</div>", unsafe_allow_html=True)

    w1, w2, w3, w4 = st.columns(4)
    w1.metric("Solar Wind", f"{weather.solar_wind_speed} km/s")
    w2.metric("Bt", f"{weather.solar_wind_bt} nT")
    w3.metric("Bz", f"{weather.solar_wind_bz} nT")
    w4.metric("10.7cm Flux", f"{weather.radio_flux} sfu")


def render_dashboard(store: FleetStore, settings: RuntimeSettings, live: bool) -> None:
    active = store.active()
    if not active:
        st.info("Open an active mission from Your Fleet to see its dashboard.")
        return

    norad_id = int(active["noradId"])
    st.header(f"{active['name']} | NORAD {norad_id}")
    st.caption(f"{active['type']} | {active['orbit']} | {active['downlinkRate']} downlink")

    telemetry = st.session_state.setdefault("telemetry", SystemTelemetry())
    comms = st.session_state.setdefault("comms", CommsLink())
    events = st.session_state.setdefault("events", EventLog())
    console = _console(norad_id)

    # Catch the synthetic streams up with wall-clock time.
    now = time.monotonic()
    steps, st.session_state.last_step = due_steps(
        st.session_state.get("last_step"), now, config.TELEMETRY_STEP_SECONDS
    )
    telemetry.advance(steps)
    for _ in range(steps):
        comms.step()

    emits, st.session_state.last_event = due_steps(
        st.session_state.get("last_event"), now, config.EVENT_LOG_STEP_SECONDS
    )
    for _ in range(emits):
        events.emit()
    console.advance()

    left, right = st.columns([1.5, 1], gap="medium")
    with left:
        positions = cached_positions(norad_id, settings.proxy_url, active["name"], settings.http_timeout_seconds)
        if positions is None:
            st.error(config.MSG_TRACKING_FAILED)
        else:
            st.plotly_chart(tracking_map(positions), width="stretch")
            latest = positions.latest
            p1, p2, p3 = st.columns(3)
            p1.metric("Latitude", f"{latest.satlatitude:.2f} deg")
            p2.metric("Longitude", f"{latest.satlongitude:.2f} deg")
            p3.metric("Altitude", f"{latest.sataltitude:.2f} km")

        tle = cached_tle(norad_id, settings.proxy_url, settings.http_timeout_seconds)
        if tle is not None:
            st.code("\n".join(tle.tle), language=None)

        st.plotly_chart(telemetry_plot(telemetry.frame()), width="stretch")

    with right:
        link = comms.state
        c1, c2 = st.columns(2)
        c1.metric("Uplink", f"{link.uplink:.2f} Mbps")
        c2.metric("Downlink", f"{link.downlink:.2f} Mbps")
        c3, c4 = st.columns(2)
        c3.metric("Latency", f"{link.latency:.0f} ms")
        c4.metric("Signal", f"{link.signal_strength:.1f} dBm")
        st.caption(f"Bit error rate {link.bit_error_rate:.2e}")

        st.subheader("Logs")
        for event in reversed(events.events):
            st.write(f"`{event.timestamp:%H:%M:%S}` **{event.type.upper()}** {event.message}")

        render_console(console)

    render_space_weather(settings)

    if live:
        time.sleep(settings.refresh_seconds)
        st.rerun()


@st.cache_resource
def load_store() -> FleetStore:
    return FleetStore(load_settings().fleet_path)


def main() -> None:
    st.set_page_config(page_title="Mission Deck", layout="wide")
    settings = load_settings()
    catalog = load_reference_catalog(str(settings.catalog_path))
    store = load_store()
    inject_css()

    st.sidebar.markdown("## Mission Deck")
    st.session_state.setdefault("page", PAGES[0])
    page = st.sidebar.radio("Navigate", PAGES, key="page")
    live = st.sidebar.toggle("Live Playback", value=False)

    flash = st.session_state.pop("flash", None)
    if flash:
        st.warning(flash)

    if page == "Services":
        render_services(catalog)
    elif page == "Satellites":
        render_satellites(catalog)
    elif page == "Configure":
        render_configure(catalog, store)
    elif page == "Your Fleet":
        render_fleet(store)
    else:
        render_dashboard(store, settings, live)


if __name__ == "__main__":
    main()
