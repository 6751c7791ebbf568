import streamlit as st

from domain.models import ACTIVE_STATUSES, District
from element_component import confirmation_dialog, get_client, get_notifier, records_table, show_notifications
from services.filter_service import filter_districts, unique_values

st.set_page_config(page_title="Districts", page_icon="🗺️", layout="wide")
st.sidebar.header("🗺️ Districts")

client = get_client()
notifier = get_notifier()

ok, msg, districts = client.list_districts()
if not ok:
    notifier.error(msg)

st.title("🗺️ Districts")
if st.button("🔄 Refresh"):
    st.rerun()

# -----------------------------------------------------------------------------
# Filters + table
# -----------------------------------------------------------------------------
col_q, col_state, col_zone, col_status = st.columns([2, 1, 1, 1])
search = col_q.text_input("Search", placeholder="Name, state or code")
state = col_state.selectbox("State", ["All States"] + unique_values(districts, "state"))
zone = col_zone.selectbox("Zone", ["All Zones"] + unique_values(districts, "zone_region"))
status = col_status.selectbox("Status", ("All Status",) + ACTIVE_STATUSES)

filtered = filter_districts(districts, query=search, state=state, zone=zone, active_status=status)

records_table(
    filtered,
    {
        "district_name": "District",
        "district_code": "Code",
        "state": "State",
        "postal_code": "Postal Code",
        "zone_region": "Zone",
        "active_status": "Status",
    },
)

st.divider()

# -----------------------------------------------------------------------------
# Create / edit form
# -----------------------------------------------------------------------------
by_id = {d.get("id"): d for d in districts}
editing_id = st.selectbox(
    "Edit existing district",
    list(by_id.keys()),
    index=None,
    placeholder="New district",
    format_func=lambda i: f"{by_id[i].get('district_name')} ({by_id[i].get('state')})",
)
current = District.from_record(by_id[editing_id]) if editing_id is not None else District()

with st.form(f"district_form_{editing_id}", enter_to_submit=False):
    st.subheader("Edit District" if editing_id is not None else "Add District")
    c1, c2 = st.columns(2)
    current.district_name = c1.text_input("District Name *", value=current.district_name)
    current.district_code = c2.text_input("District Code", value=current.district_code)
    current.state = c1.text_input("State *", value=current.state)
    current.postal_code = c2.text_input("Postal Code", value=current.postal_code)
    current.zone_region = c1.text_input("Zone / Region", value=current.zone_region)
    current.active_status = c2.selectbox(
        "Status",
        ACTIVE_STATUSES,
        index=ACTIVE_STATUSES.index(current.active_status) if current.active_status in ACTIVE_STATUSES else 0,
    )
    current.remarks = st.text_area("Remarks", value=current.remarks)

    if st.form_submit_button("Save"):
        if not current.district_name.strip() or not current.state.strip():
            st.error("District name and state are required")
        else:
            row = current.to_record()
            if editing_id is not None:
                ok_s, msg_s, _ = client.update_district(editing_id, row)
            else:
                row.pop("id", None)
                ok_s, msg_s, _ = client.create_district(row)
            if ok_s:
                notifier.success(msg_s)
                st.rerun()
            else:
                notifier.error(msg_s)

if editing_id is not None and st.button("🗑 Delete district"):
    def _delete() -> bool:
        ok_d, msg_d, _ = client.delete_district(editing_id)
        notifier.notify(msg_d, "success" if ok_d else "error")
        return ok_d

    confirmation_dialog(f"Delete district {current.district_name}?", _delete)

show_notifications(notifier)
