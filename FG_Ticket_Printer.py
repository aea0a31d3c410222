import logging

import streamlit as st

import config
from data_integrator import fetch_parts, fetch_runners
from domain.errors import NoTicketsError, PrintSurfaceUnavailableError, QrEncoderNotConfiguredError
from domain.models import DataSource, TicketRequest
from element_component import StreamlitPrintSurface, show_status, tickets_dataframe
from services.label_document_service import build_print_html
from services.print_service import BrowserPrintSurface, generate_and_print_tickets
from services.ticket_service import resolve_quantity

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Page config
# -----------------------------------------------------------------------------
st.set_page_config(page_title="FG Ticket Printer", page_icon="🏷️", layout="wide")
st.title("🏷️ FG Ticket Printer")
st.caption("Touch Screen Ready • Thermal Print")

if "print_status" not in st.session_state:
    st.session_state["print_status"] = None
if "last_outcome" not in st.session_state:
    st.session_state["last_outcome"] = None

# -----------------------------------------------------------------------------
# 1) Load parts + runners (backend or seed catalog)
# -----------------------------------------------------------------------------
parts_result = fetch_parts()
runners_result = fetch_runners()
parts = parts_result.data
runners = runners_result.data

if parts_result.is_fallback or runners_result.is_fallback:
    st.info("Server tidak dapat dihubungi, menggunakan data demo.")

if not parts:
    st.warning("No parts available")
    st.stop()

col_main, col_side = st.columns([2, 1])

# -----------------------------------------------------------------------------
# 2) Select part
# -----------------------------------------------------------------------------
with col_main:
    st.subheader("Finished Good Parts")
    part_by_label = {f"{p.name} ({p.part_no} • {p.model})": p for p in parts}
    part_label = st.radio("Tap a part to proceed", options=list(part_by_label.keys()), key="part_choice")
    selected_part = part_by_label[part_label]

    if selected_part.image_url:
        st.image(selected_part.image_url, width=220)
    st.write(f"**{selected_part.name}** | {selected_part.part_no} • {selected_part.model}")
    st.write(f"STD: **{selected_part.std_packing}** pcs")

# -----------------------------------------------------------------------------
# 3) Quantity + runner
# -----------------------------------------------------------------------------
with col_side:
    st.subheader("Quantity Selection")
    mode_label = st.radio(
        "Mode",
        options=["STD Packing", "Custom QTY"],
        horizontal=True,
        key="qty_mode",
    )
    if mode_label == "STD Packing":
        copies = resolve_quantity(selected_part, "std")
        st.metric("Standard Packing Quantity", copies)
    else:
        custom_qty = st.number_input("Enter Custom Quantity", min_value=1, step=1, value=1, key="custom_qty")
        copies = resolve_quantity(selected_part, "custom", custom_qty)

    st.subheader("Runner")
    runner_by_name = {f"{r.name} ({r.id})": r for r in runners}
    runner_label = st.selectbox(
        "Select runner",
        options=list(runner_by_name.keys()),
        index=None,
        placeholder="Choose manpower...",
        key="runner_choice",
    )
    selected_runner = runner_by_name.get(runner_label) if runner_label else None
    if selected_runner and selected_runner.avatar_url:
        st.image(selected_runner.avatar_url, width=80)

    ready_to_print = selected_runner is not None and copies >= 1
    label_word = "Labels" if copies > 1 else "Label"
    print_clicked = st.button(
        f"Print {copies} {label_word}",
        type="primary",
        disabled=not ready_to_print,
        width="stretch",
    )

# -----------------------------------------------------------------------------
# 4) Print
# -----------------------------------------------------------------------------
if print_clicked and selected_runner is not None:
    request = TicketRequest(part_id=selected_part.id, runner_id=selected_runner.id, copies=copies)
    acquire_surface = BrowserPrintSurface.acquire if config.PRINT_SURFACE == "browser" else StreamlitPrintSurface.acquire

    with st.spinner("Generating tickets..."):
        try:
            outcome = generate_and_print_tickets(request, parts, runners, acquire_surface=acquire_surface)
        except PrintSurfaceUnavailableError as e:
            st.session_state["print_status"] = ("error", str(e))
        except (NoTicketsError, QrEncoderNotConfiguredError) as e:
            logger.error("Print action failed: %s", e)
            st.session_state["print_status"] = (
                "error",
                "Failed to generate/print tickets. Please check connection or popup blockers.",
            )
        else:
            st.session_state["last_outcome"] = outcome
            st.session_state["print_status"] = ("success", f"Sent {len(outcome.tickets)} label(s) to print.")

if st.session_state["print_status"]:
    show_status(*st.session_state["print_status"])

outcome = st.session_state["last_outcome"]
if outcome is not None:
    st.divider()
    st.subheader("Last Print")
    if outcome.source is DataSource.FALLBACK:
        st.caption("Tickets generated locally (not saved to server).")
    st.dataframe(tickets_dataframe(outcome.tickets), width="stretch", hide_index=True)
    st.download_button(
        "Download labels (HTML)",
        data=build_print_html(outcome.tickets, auto_print=False).encode("utf-8"),
        file_name="fg_tickets.html",
        mime="text/html",
    )

st.caption("For silent printing, install QZ Tray and configure default thermal printer")
