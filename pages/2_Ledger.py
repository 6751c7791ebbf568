import streamlit as st

from domain.models import ACTIVE_STATUSES, PARTY_TYPES, Ledger
from element_component import confirmation_dialog, get_client, get_notifier, records_table, show_notifications
from services.filter_service import (
    apply_district,
    apply_state,
    districts_for_state,
    filter_ledgers,
    unique_values,
)

st.set_page_config(page_title="Ledger", page_icon="📒", layout="wide")
st.sidebar.header("📒 Ledger (Parties)")

client = get_client()
notifier = get_notifier()

ok_l, msg_l, ledgers = client.list_ledgers()
if not ok_l:
    notifier.error(msg_l)
ok_d, msg_d, districts = client.list_districts()
if not ok_d:
    notifier.error(msg_d)

st.title("📒 Ledger")
if st.button("🔄 Refresh"):
    st.rerun()

# -----------------------------------------------------------------------------
# Filters + table
# -----------------------------------------------------------------------------
states = unique_values(districts, "state")

col_q, col_group, col_state, col_status = st.columns([2, 1, 1, 1])
search = col_q.text_input("Search", placeholder="Name, code, GSTIN or mobile")
group = col_group.selectbox("Group", ("All Groups",) + PARTY_TYPES)
state_filter = col_state.selectbox("State", ["All States"] + states)
status = col_status.selectbox("Status", ("All Status",) + ACTIVE_STATUSES)

filtered = filter_ledgers(ledgers, query=search, party_type=group, state=state_filter, active_status=status)

records_table(
    filtered,
    {
        "party_code": "Code",
        "party_name": "Party Name",
        "party_type": "Group",
        "state": "State",
        "district_name": "District",
        "mobile_number": "Mobile",
        "gstin": "GSTIN",
        "active_status": "Status",
    },
)

st.divider()

# -----------------------------------------------------------------------------
# Create / edit form
# -----------------------------------------------------------------------------
by_id = {r.get("id"): r for r in ledgers}
editing_id = st.selectbox(
    "Edit existing party",
    list(by_id.keys()),
    index=None,
    placeholder="New party",
    format_func=lambda i: by_id[i].get("party_name") or f"Party {i}",
)

form_key = f"ledger_form_state_{editing_id}"
if form_key not in st.session_state:
    st.session_state[form_key] = (Ledger.from_record(by_id[editing_id]) if editing_id is not None else Ledger()).to_record()
form = st.session_state[form_key]

# state and district sit outside the form so the district list follows the state
st.subheader("Edit Party" if editing_id is not None else "Add Party")
col_s, col_d = st.columns(2)
state_options = states if form["state"] in states or not form["state"] else states + [form["state"]]
picked_state = col_s.selectbox(
    "State",
    state_options,
    index=state_options.index(form["state"]) if form["state"] in state_options else None,
    placeholder="Select state",
    key=f"{form_key}_state",
)
if picked_state and picked_state != form["state"]:
    apply_state(form, picked_state, districts)

state_districts = districts_for_state(districts, form["state"])
district_names = [d.get("district_name") for d in state_districts]
picked_district = col_d.selectbox(
    "District",
    district_names,
    index=district_names.index(form["district_name"]) if form["district_name"] in district_names else None,
    placeholder="Select district",
    key=f"{form_key}_district_{form['state']}",
)
if picked_district and picked_district != form["district_name"]:
    apply_district(form, next(d for d in state_districts if d.get("district_name") == picked_district))

with st.form(f"ledger_form_{editing_id}", enter_to_submit=False):
    c1, c2, c3 = st.columns(3)
    form["party_code"] = c1.text_input("Party Code", value=form["party_code"])
    form["party_name"] = c2.text_input("Party Name *", value=form["party_name"])
    form["party_type"] = c3.selectbox(
        "Group",
        PARTY_TYPES,
        index=PARTY_TYPES.index(form["party_type"]) if form["party_type"] in PARTY_TYPES else 0,
    )
    form["address"] = st.text_input("Address", value=form["address"])
    c4, c5, c6 = st.columns(3)
    c4.text_input("District Code", value=form["district_code"], disabled=True)
    form["postal_code"] = c5.text_input("Postal Code", value=form["postal_code"])
    form["gstin"] = c6.text_input("GSTIN", value=form["gstin"])
    form["pan"] = c4.text_input("PAN", value=form["pan"])
    form["contact_person"] = c5.text_input("Contact Person", value=form["contact_person"])
    form["mobile_number"] = c6.text_input("Mobile", value=form["mobile_number"])
    form["email"] = c4.text_input("Email", value=form["email"])
    form["ledger_mapping"] = c5.text_input("Ledger Mapping", value=form["ledger_mapping"])
    form["active_status"] = c6.selectbox(
        "Status",
        ACTIVE_STATUSES,
        index=ACTIVE_STATUSES.index(form["active_status"]) if form["active_status"] in ACTIVE_STATUSES else 0,
    )

    if st.form_submit_button("Save"):
        if not form["party_name"].strip():
            st.error("Party name is required")
        else:
            row = dict(form)
            if editing_id is not None:
                ok_s, msg_s, _ = client.update_ledger(editing_id, row)
            else:
                row.pop("id", None)
                ok_s, msg_s, _ = client.create_ledger(row)
            if ok_s:
                notifier.success(msg_s)
                del st.session_state[form_key]
                st.rerun()
            else:
                notifier.error(msg_s)

if editing_id is not None and st.button("🗑 Delete party"):
    def _delete() -> bool:
        ok_del, msg_del, _ = client.delete_ledger(editing_id)
        notifier.notify(msg_del, "success" if ok_del else "error")
        return ok_del

    confirmation_dialog(f"Delete party {form['party_name']}?", _delete)

show_notifications(notifier)
