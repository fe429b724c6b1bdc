"""Streamlit UI for the Job Portal."""
from __future__ import annotations

import html
import sys
import time
import uuid
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from jobportal import router as pages
from jobportal.context import AppContext, build_context
from jobportal.log import get_logger
from jobportal.models import Admin, Guest, JobType, User, ValidationError

log = get_logger(__name__)

# ── Constants ────────────────────────────────────────────────────────────

JOB_TYPES: list[str] = [t.value for t in JobType]
EMPTY_FORM: dict[str, str] = {
    "title": "", "description": "", "requirements": "",
    "location": "", "salary": "", "job_type": JobType.FULL_TIME.value,
}

_CSS = """
<style>
[data-testid="stAppViewContainer"] {
    background: linear-gradient(135deg, #eef2ff 0%, #f5f3ff 50%, #ecfeff 100%);
}
.job-card {
    padding: 1rem 1.25rem; margin-bottom: 0.75rem;
    background: rgba(255,255,255,0.7);
    border: 1px solid rgba(79,70,229,0.2); border-radius: 12px;
    box-shadow: 0 4px 16px rgba(0,0,0,0.05);
}
.job-meta { color: #555; font-size: 0.9rem; }
.badge-applied {
    padding: 0.1rem 0.5rem; border-radius: 6px;
    background: #dcfce7; color: #166534; font-size: 0.8rem;
}
</style>
"""

# ── Helpers ──────────────────────────────────────────────────────────────


def _client_id() -> str:
    """Per-browser token kept in the URL so each visitor restores only their own login."""
    token = st.query_params.get("client")
    if not token:
        token = uuid.uuid4().hex
        st.query_params["client"] = token
    return token


def _ctx() -> AppContext:
    if "ctx" not in st.session_state:
        st.session_state["ctx"] = build_context(client_id=_client_id())
    return st.session_state["ctx"]


def _go(page: str) -> None:
    _ctx().router.navigate(page)
    st.session_state.pop("notice", None)
    st.rerun()


def _notify(kind: str, message: str) -> None:
    st.session_state["notice"] = (kind, message)


def _show_notice() -> None:
    notice = st.session_state.get("notice")
    if not notice:
        return
    kind, message = notice
    box = {"success": st.success, "error": st.error}.get(kind, st.info)
    c1, c2 = st.columns([6, 1])
    with c1:
        box(message)
    with c2:
        if st.button("Close", key="close_notice"):
            st.session_state.pop("notice", None)
            st.rerun()


def _deny(message: str) -> None:
    """Show the denial and send the visitor to the login page shortly after.

    The message is also kept as the notice so it is still shown on the login page.
    """
    st.error(message)
    _notify("error", message)
    router = _ctx().router
    if router.seconds_until_next() is None:
        router.schedule(pages.LOGIN)


def _guard(page: str) -> bool:
    message = pages.check_access(_ctx().identity, page)
    if message:
        _deny(message)
        return False
    return True


def _fmt_date(value) -> str:
    return value.strftime("%b %d, %Y %H:%M") if value else "N/A"


# ── Page: Home ───────────────────────────────────────────────────────────


def page_home() -> None:
    st.title("Welcome to Your Dream Job Portal")
    st.write(
        "Discover exciting career opportunities and take the next step "
        "in your professional journey."
    )
    c1, c2 = st.columns(2)
    if c1.button("Log In", type="primary", use_container_width=True):
        _go(pages.LOGIN)
    if c2.button("Sign Up", use_container_width=True):
        _go(pages.SIGNUP)


# ── Page: Login / Signup ─────────────────────────────────────────────────


def page_login() -> None:
    ctx = _ctx()
    st.header("Login")
    with st.form("login_form"):
        email = st.text_input("Email address", placeholder="you@example.com", key="login_email")
        password = st.text_input("Password", type="password", key="login_password")
        submitted = st.form_submit_button("Log In", type="primary")

    if submitted:
        result = ctx.sessions.login(email.strip(), password)
        if result.success:
            _notify("success", "Login successful!")
            ctx.router.schedule(pages.landing_page(ctx.identity))
        else:
            _notify("error", result.message or "Login failed.")
        st.rerun()

    if st.button("Don't have an account? Sign Up"):
        _go(pages.SIGNUP)


def page_signup() -> None:
    ctx = _ctx()
    st.header("Sign Up")
    with st.form("signup_form"):
        email = st.text_input("Email address", placeholder="you@example.com", key="signup_email")
        password = st.text_input("Password", type="password", key="signup_password")
        submitted = st.form_submit_button("Sign Up", type="primary")

    if submitted:
        result = ctx.sessions.signup(email.strip(), password)
        if result.success:
            _notify("success", "Signup successful! Please log in.")
            ctx.router.schedule(pages.LOGIN)
        else:
            _notify("error", result.message or "Signup failed.")
        st.rerun()

    if st.button("Already have an account? Log In"):
        _go(pages.LOGIN)


# ── Page: User ───────────────────────────────────────────────────────────


def page_user_dashboard() -> None:
    if not _guard(pages.USER_DASHBOARD):
        return
    who = _ctx().identity
    st.header(f"Welcome, {who.email}!")
    st.caption(f"Your user ID: `{who.user_id}`")
    c1, c2 = st.columns(2)
    with c1:
        st.subheader("🔍 Browse Jobs")
        st.write("Find new opportunities that match your skills.")
        if st.button("Browse Jobs", use_container_width=True):
            _go(pages.BROWSE_JOBS)
    with c2:
        st.subheader("📄 Applied Jobs")
        st.write("Review the status of your job applications.")
        if st.button("Applied Jobs", use_container_width=True):
            _go(pages.APPLIED_JOBS)


def _apply(job) -> None:
    """Button callback; runs before the page renders, so no rerun is needed."""
    ctx = _ctx()
    who = ctx.identity
    if isinstance(who, Guest):
        _notify("error", "Please log in to apply for jobs.")
    elif isinstance(who, Admin):
        _notify("error", "Admins cannot apply for jobs.")
    else:
        result = ctx.ledger.apply(job, who.email, who.user_id)
        _notify(result.kind, result.message or "")


def _job_card(job, applied: bool = False) -> None:
    badge = ' <span class="badge-applied">Applied</span>' if applied else ""
    st.markdown(
        f'<div class="job-card"><strong>{html.escape(job.title)}</strong>{badge}<br>'
        f'<span class="job-meta">{html.escape(job.location)} · {job.job_type.value} · {html.escape(job.salary)}</span>'
        f"<p>{html.escape(job.description)}</p>"
        f'<span class="job-meta">Requirements: {html.escape(job.requirements)}</span></div>',
        unsafe_allow_html=True,
    )


def page_browse_jobs() -> None:
    if not _guard(pages.BROWSE_JOBS):
        return
    ctx = _ctx()
    st.header("Browse Jobs")

    c1, c2 = st.columns(2)
    location = c1.text_input("Filter by location", placeholder="e.g. Remote")
    job_type = c2.selectbox("Job type", ["All Job Types"] + JOB_TYPES)
    jobs = ctx.catalog.list(
        location=location.strip() or None,
        job_type=None if job_type == "All Job Types" else job_type,
    )

    if not jobs:
        st.info("No jobs found matching your criteria.")
        return

    applied_ids = ctx.ledger.applied_job_ids(ctx.identity.user_id)
    for job in jobs:
        applied = job.id in applied_ids
        _job_card(job, applied=applied)
        st.button(
            "Applied" if applied else "Apply Now",
            key=f"apply_{job.id}",
            disabled=applied,
            on_click=_apply,
            args=(job,),
        )


def page_applied_jobs() -> None:
    if not _guard(pages.APPLIED_JOBS):
        return
    ctx = _ctx()
    st.header("My Applied Jobs")
    apps = ctx.ledger.list_for_user(ctx.identity.user_id)
    if not apps:
        st.info("You haven't applied for any jobs yet.")
        if st.button("Browse Jobs"):
            _go(pages.BROWSE_JOBS)
        return
    for app in apps:
        with st.container(border=True):
            st.markdown(f"**{app.job_title}**")
            st.caption(f"Applied On: {_fmt_date(app.applied_at)}")


# ── Page: Admin ──────────────────────────────────────────────────────────


def page_admin_dashboard() -> None:
    if not _guard(pages.ADMIN_DASHBOARD):
        return
    ctx = _ctx()
    st.header(f"Admin Dashboard: {ctx.identity.email}")
    c1, c2, c3 = st.columns(3)
    c1.metric("Jobs", len(ctx.catalog))
    c2.metric("Applications", len(ctx.ledger))
    c3.metric("Applicants", len({a.user_id for a in ctx.ledger.list_all()}))

    c1, c2 = st.columns(2)
    with c1:
        st.subheader("💼 Manage Jobs")
        st.write("Add, edit, or delete job listings.")
        if st.button("Manage Jobs", use_container_width=True):
            _go(pages.MANAGE_JOBS)
    with c2:
        st.subheader("📋 View User Applications")
        st.write("Review all applications submitted by users.")
        if st.button("View Applications", use_container_width=True):
            _go(pages.VIEW_APPLICATIONS)


def _job_form(editing) -> None:
    ctx = _ctx()
    data = dict(EMPTY_FORM)
    if editing is not None:
        data.update(
            {k: getattr(editing, k) for k in EMPTY_FORM if k != "job_type"},
            job_type=editing.job_type.value,
        )

    st.subheader("Edit Job" if editing else "Add New Job")
    with st.form("job_form", clear_on_submit=editing is None):
        c1, c2 = st.columns(2)
        with c1:
            title = st.text_input("Job Title", value=data["title"])
            location = st.text_input("Location", value=data["location"])
            salary = st.text_input("Salary", value=data["salary"])
        with c2:
            job_type = st.selectbox(
                "Job Type", JOB_TYPES, index=JOB_TYPES.index(data["job_type"])
            )
            requirements = st.text_area("Requirements", value=data["requirements"])
        description = st.text_area("Description", value=data["description"])
        submitted = st.form_submit_button(
            "Update Job" if editing else "Add Job", type="primary"
        )

    if not submitted:
        return
    fields = {
        "title": title, "description": description, "requirements": requirements,
        "location": location, "salary": salary, "job_type": job_type,
    }
    try:
        if editing is not None:
            updated = editing.with_changes(**fields)
            if ctx.catalog.update(updated) is None:
                _notify("error", "Failed to save job: it no longer exists.")
            else:
                _notify("success", "Job updated successfully!")
        else:
            ctx.catalog.add(fields)
            _notify("success", "Job added successfully!")
    except ValidationError as exc:
        _notify("error", f"Failed to save job: {exc}")
        st.rerun()
        return
    st.session_state.pop("editing_job", None)
    st.rerun()


def page_manage_jobs() -> None:
    if not _guard(pages.MANAGE_JOBS):
        return
    ctx = _ctx()
    st.header("Manage Jobs")

    editing = ctx.catalog.get(st.session_state.get("editing_job", ""))
    _job_form(editing)
    if editing is not None and st.button("Cancel Edit"):
        st.session_state.pop("editing_job", None)
        st.rerun()

    st.divider()
    st.subheader("Current Job Listings")
    jobs = ctx.catalog.list()
    if not jobs:
        st.info("No jobs posted yet.")
        return
    for job in jobs:
        _job_card(job)
        c1, c2, _ = st.columns([1, 1, 4])
        if c1.button("Edit", key=f"edit_{job.id}"):
            st.session_state["editing_job"] = job.id
            st.rerun()
        if c2.button("Delete", key=f"delete_{job.id}"):
            ctx.catalog.delete(job.id)
            if st.session_state.get("editing_job") == job.id:
                st.session_state.pop("editing_job", None)
            _notify("success", "Job deleted successfully!")
            st.rerun()


def page_view_applications() -> None:
    if not _guard(pages.VIEW_APPLICATIONS):
        return
    st.header("All User Applications")
    apps = _ctx().ledger.list_all()
    if not apps:
        st.info("No applications submitted yet.")
        return
    for app in apps:
        with st.container(border=True):
            st.markdown(f"**{app.job_title}**")
            st.write(f"Applicant: {app.user_email} (`{app.user_id}`)")
            st.caption(f"Applied On: {_fmt_date(app.applied_at)}")


# ── Page: Items ──────────────────────────────────────────────────────────


def page_items() -> None:
    from jobportal.items_client import add_item, format_item, get_items

    st.header("Items")
    with st.form("item_form", clear_on_submit=True):
        c1, c2 = st.columns([3, 1])
        name = c1.text_input("Name")
        quantity = c2.number_input("Quantity", min_value=0, step=1, value=1)
        submitted = st.form_submit_button("Add Item")
    if submitted and name.strip():
        try:
            add_item({"name": name.strip(), "quantity": int(quantity)})
        except Exception as exc:
            log.error("Add item failed: %s", exc)
            st.error(f"Could not add item: {exc}")

    try:
        items = get_items()
    except Exception as exc:
        log.error("Error fetching items: %s", exc)
        st.error("Items service is unavailable.")
        return
    if not items:
        st.info("No items yet.")
    for item in items:
        st.markdown(f"- {format_item(item)}")


# ── Main ─────────────────────────────────────────────────────────────────

RENDERERS = {
    pages.HOME: page_home,
    pages.LOGIN: page_login,
    pages.SIGNUP: page_signup,
    pages.USER_DASHBOARD: page_user_dashboard,
    pages.BROWSE_JOBS: page_browse_jobs,
    pages.APPLIED_JOBS: page_applied_jobs,
    pages.ADMIN_DASHBOARD: page_admin_dashboard,
    pages.MANAGE_JOBS: page_manage_jobs,
    pages.VIEW_APPLICATIONS: page_view_applications,
    pages.ITEMS: page_items,
}


def _navbar() -> None:
    ctx = _ctx()
    who = ctx.identity
    with st.sidebar:
        st.markdown("## Job Portal")
        for label, page in pages.nav_entries(who):
            if st.button(label, key=f"nav_{page}", use_container_width=True):
                _go(page)
        if st.button("Items", key="nav_items", use_container_width=True):
            _go(pages.ITEMS)

        st.divider()
        if isinstance(who, (User, Admin)):
            role = "Admin" if isinstance(who, Admin) else "User"
            st.caption(f"{role} ({who.user_id[:8]}...)")
            if st.button("Log out", use_container_width=True):
                ctx.sessions.logout()
                _go(pages.HOME)
        else:
            if st.button("Log in", use_container_width=True):
                _go(pages.LOGIN)
            if st.button("Sign up", use_container_width=True):
                _go(pages.SIGNUP)


def _run_pending_redirect() -> None:
    router = _ctx().router
    wait = router.seconds_until_next()
    if wait is None:
        return
    time.sleep(wait)
    router.tick()
    st.rerun()


def main() -> None:
    st.set_page_config(page_title="Job Portal", page_icon="💼", layout="wide")
    st.markdown(_CSS, unsafe_allow_html=True)
    ctx = _ctx()
    ctx.router.tick()
    _navbar()
    _show_notice()
    RENDERERS[ctx.router.resolve()]()
    _run_pending_redirect()


main()
