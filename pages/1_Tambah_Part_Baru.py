import re

import streamlit as st

from data_integrator import fetch_parts
from element_component import confirmation_dialog_add_part

st.set_page_config(page_title="Tambah Part Baru", page_icon="➕")
st.sidebar.header("➕ Tambah Part Baru")

if 'part_input_state' not in st.session_state:
    st.session_state['part_input_state'] = False


def validate_part_id(val, known_ids):
    if not val:
        return False, "Part ID tidak boleh kosong"
    if not re.match(r"^[A-Za-z0-9_-]{1,32}$", val):
        return False, "Part ID hanya boleh huruf, nombor, tanda hubung atau garis bawah (1–32 aksara)."
    if val in known_ids:
        return False, f"Part ID '{val}' sudah wujud"
    return True, ""


def validate_required(label, val):
    if not val or not val.strip():
        return False, f"{label} tidak boleh kosong"
    return True, ""


known_ids = {p.id for p in fetch_parts().data}

with st.form("part_input_form", enter_to_submit=False):
    st.subheader("Tambah Part Baru:")
    part_id_input = st.text_input("Part ID")
    part_name_input = st.text_input("Part Name")
    part_no_input = st.text_input("Part No")
    model_input = st.text_input("Model")
    std_packing_input = st.number_input("STD Packing", min_value=1, step=1, value=1)
    image_input = st.file_uploader("Gambar Part", type=["jpg", "jpeg", "png", "webp"])

    submitted = st.form_submit_button("Submit")

    if submitted:
        st.session_state['part_input_state'] = False
        checks = [
            validate_part_id(part_id_input.strip(), known_ids),
            validate_required("Part Name", part_name_input),
            validate_required("Part No", part_no_input),
            validate_required("Model", model_input),
        ]
        if image_input is None:
            checks.append((False, "Gambar part diperlukan"))

        errors = [msg for ok, msg in checks if not ok]
        for msg in errors:
            st.error(msg)

        if not errors:
            confirmation_dialog_add_part(
                {
                    "Part ID": part_id_input.strip(),
                    "Part Name": part_name_input.strip(),
                    "Part No": part_no_input.strip(),
                    "Model": model_input.strip(),
                    "STD Packing": int(std_packing_input),
                },
                image_input,
                "part_input_state",
            )

    if st.session_state['part_input_state']:
        st.success("Part baru berjaya ditambah!")
