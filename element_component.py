from typing import Sequence

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

from data_integrator import add_part
from domain.models import Ticket
from services.print_service import PrintHandle
from utils.formatting import format_ticket_timestamp

LABEL_FRAME_HEIGHT = 480


class StreamlitPrintSurface:
    """
    Renders the label document in an inline frame of the current page.
    The document's auto-print script then prints that frame.
    """

    def __init__(self, height: int = LABEL_FRAME_HEIGHT):
        self.height = height

    @classmethod
    def acquire(cls) -> "StreamlitPrintSurface":
        return cls()

    def render(self, document: str) -> PrintHandle:
        components.html(document, height=self.height, scrolling=True)
        return PrintHandle(location="streamlit-frame")


def show_status(kind: str, message: str) -> None:
    if kind == "success":
        st.success(message)
    elif kind == "error":
        st.error(message)
    else:
        st.info(message)


def tickets_dataframe(tickets: Sequence[Ticket]) -> pd.DataFrame:
    rows = [
        {
            "SN": t.payload.unique_no,
            "Part": t.payload.part_name,
            "Part No": t.payload.part_no,
            "Model": t.payload.model,
            "Runner": t.payload.runner,
            "Created": format_ticket_timestamp(t.payload.ts),
            "Saved": "Yes" if t.id else "No",
        }
        for t in tickets
    ]
    return pd.DataFrame(rows, columns=["SN", "Part", "Part No", "Model", "Runner", "Created", "Saved"])


@st.dialog("Pengesahan")
def confirmation_dialog_add_part(form_values: dict, image_file, state_name: str):
    df = pd.DataFrame(form_values.items(), columns=["Key", "Value"])
    st.dataframe(df, hide_index=True)

    col_yes, col_no = st.columns(2)

    with col_yes:
        if st.button("Ya", type="primary", key="confirm_yes"):
            status, msg, _ = add_part(
                part_id=form_values["Part ID"],
                name=form_values["Part Name"],
                part_no=form_values["Part No"],
                model=form_values["Model"],
                std_packing=form_values["STD Packing"],
                image_bytes=image_file.getvalue(),
                image_filename=image_file.name,
                image_mimetype=image_file.type or "image/jpeg",
            )
            st.session_state[state_name] = status

            if not status:
                st.error(f"Gagal: {msg}")
            else:
                st.rerun()
    with col_no:
        if st.button("Tidak"):
            st.rerun()
