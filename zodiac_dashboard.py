"""♈ Zodiac Team Affinity Dashboard, Streamlit app.

Five tabs:
1. Roster        – member management
2. Sign matrix   – 12 × 12 sign affinity heatmap + pair lookup
3. Team analysis – team score, element balance, best pairs, insights
4. Conflicts     – organization-wide conflict scan and best pairs
5. Optimizer     – greedy team builder
"""

from __future__ import annotations

import logging
import uuid

from dotenv import load_dotenv
from lib_zodiac.affinity_service import AffinityService
from lib_zodiac.default_roster import create_default_directory
from lib_zodiac.engine.matrix import get_matrix
from lib_zodiac.errors import AffinityError
from lib_zodiac.member_directory import MemberDirectory
from lib_zodiac.settings import load_settings
from lib_zodiac.zodiac_types import SIGN_ORDER, SIGN_PROFILES, Member, ZodiacSign
import plotly.graph_objects as go  # type: ignore[import-untyped]
import streamlit as st


load_dotenv()
_SETTINGS = load_settings()
logging.basicConfig(level=_SETTINGS.log_level)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Zodiac Team Affinity", page_icon="♈", layout="wide")
st.title("♈ Zodiac Team Affinity Dashboard")


# ---------------------------------------------------------------------------
# Session-state helpers
# ---------------------------------------------------------------------------
def _get_directory() -> MemberDirectory:
    if "directory" not in st.session_state:
        st.session_state.directory = create_default_directory()
    directory: MemberDirectory = st.session_state.directory
    return directory


def _get_service() -> AffinityService:
    return AffinityService(_get_directory(), get_matrix(), _SETTINGS)


def _member_label(member: Member) -> str:
    return f"{SIGN_PROFILES[member.sign].symbol} {member.display_name}"


def _score_color(score: float) -> str:
    return "#4CAF50" if score >= 65 else "#FFC107" if score >= 50 else "#F44336"


tab1, tab2, tab3, tab4, tab5 = st.tabs([
    "👥 Roster",
    "🔢 Sign matrix",
    "🔍 Team analysis",
    "⚠️ Conflicts",
    "🧩 Optimizer",
])


# =========================================================================
# Tab 1: Roster
# =========================================================================
with tab1:
    directory = _get_directory()

    st.subheader("Add member")
    with st.form("add_member", clear_on_submit=True):
        c1, c2, c3 = st.columns([3, 2, 1])
        with c1:
            member_name = st.text_input("Name", max_chars=100)
        with c2:
            selected_sign = st.selectbox(
                "Sign",
                options=list(SIGN_ORDER),
                format_func=lambda s: f"{SIGN_PROFILES[s].symbol} {s} ({SIGN_PROFILES[s].date_range})",
            )
        with c3:
            active = st.checkbox("Active", value=True)
        submitted = st.form_submit_button("➕ Add", use_container_width=True)
        if submitted and member_name.strip():
            directory.add(Member(
                id=uuid.uuid4().hex[:8],
                name=member_name.strip(),
                sign=selected_sign,
                active=active,
            ))
            st.rerun()

    members = directory.all_members()
    st.subheader(f"Members ({len(members)})")
    for member in members:
        profile = SIGN_PROFILES[member.sign]
        mc1, mc2, mc3, mc4, mc5 = st.columns([3, 2, 2, 2, 1])
        mc1.markdown(f"**{_member_label(member)}**")
        mc2.markdown(f"`{member.sign}`")
        mc3.markdown(f"{member.element} · {profile.modality}")
        mc4.markdown("🟢 active" if member.active else "⚪ inactive")
        if mc5.button("🗑️", key=f"del_{member.id}"):
            directory.remove(member.id)
            st.rerun()

    if st.button("🔄 Reset to demo roster", use_container_width=True):
        st.session_state.pop("directory", None)
        st.rerun()


# =========================================================================
# Tab 2: Sign matrix
# =========================================================================
with tab2:
    matrix = get_matrix()
    labels = [f"{SIGN_PROFILES[s].symbol} {s}" for s in SIGN_ORDER]
    grid = [[matrix.score(a, b) for b in SIGN_ORDER] for a in SIGN_ORDER]
    fig_signs = go.Figure(go.Heatmap(
        z=grid,
        x=labels,
        y=labels,
        colorscale="RdYlGn",
        zmin=0,
        zmax=100,
        text=grid,
        texttemplate="%{text}",
    ))
    fig_signs.update_layout(title="Sign affinity matrix", height=600)
    st.plotly_chart(fig_signs, use_container_width=True)

    lc1, lc2 = st.columns(2)
    with lc1:
        sign_a = st.selectbox("First sign", options=list(SIGN_ORDER), key="sign_a")
    with lc2:
        sign_b = st.selectbox("Second sign", options=list(SIGN_ORDER), index=2, key="sign_b")
    entry = _get_service().lookup_sign_affinity(ZodiacSign(sign_a), ZodiacSign(sign_b))
    m1, m2, m3, m4, m5 = st.columns(5)
    m1.metric("Overall", entry.overall_score)
    m2.metric("Work", entry.work_score)
    m3.metric("Communication", entry.communication_score)
    m4.metric("Synergy", entry.synergy_score)
    m5.metric("Conflict potential", entry.conflict_potential)
    st.markdown(f"**{entry.level}** · element harmony: **{entry.element_harmony}**")
    st.markdown(f"💪 {entry.strengths}")
    st.markdown(f"⚡ {entry.challenges}")
    st.markdown(f"🧭 {entry.management_tips}")
    st.caption(f"Best for: {entry.best_collaboration}")


# =========================================================================
# Tab 3: Team analysis
# =========================================================================
with tab3:
    service = _get_service()
    members = service.directory.all_members()
    by_id = {m.id: m for m in members}
    team_ids = st.multiselect(
        "Team members",
        options=list(by_id),
        format_func=lambda mid: _member_label(by_id[mid]),
        key="team_ids",
    )
    if len(team_ids) < 2:
        st.warning("Select at least 2 members to analyse a team.")
    else:
        report = service.build_team_report(team_ids, team_name="Selected team")
        result = report.affinity

        st.metric("Average affinity", f"{result.average_score}", help=str(result.level))
        st.markdown(f"**{report.dynamics_summary}**")

        # --- Element balance ---
        fig_bal = go.Figure(go.Bar(
            x=[str(e) for e in result.element_balance],
            y=list(result.element_balance.values()),
            text=list(result.element_balance.values()),
            textposition="outside",
        ))
        fig_bal.update_layout(title="Element balance", height=320)
        st.plotly_chart(fig_bal, use_container_width=True)

        # --- Member heatmap ---
        heat = service.heatmap(team_ids)
        fig_heat = go.Figure(go.Heatmap(
            z=heat.values(),
            x=heat.column_labels,
            y=heat.row_labels,
            colorscale="RdYlGn",
            zmin=0,
            zmax=100,
            text=heat.values(),
            texttemplate="%{text}",
        ))
        fig_heat.update_layout(title="Member affinity heatmap", height=420)
        st.plotly_chart(fig_heat, use_container_width=True)

        st.subheader("🤝 Best pairs")
        for bp in report.top_compatible_pairs:
            st.markdown(
                f"- **{bp.member_1.name}** & **{bp.member_2.name}**: "
                f"{bp.compatibility_score}: {bp.collaboration_type}"
            )

        st.subheader("💡 Insights")
        for line in result.insights:
            st.markdown(line)
        for rec in report.recommendations:
            st.markdown(f"🟡 {rec}")


# =========================================================================
# Tab 4: Conflicts
# =========================================================================
with tab4:
    service = _get_service()
    st.subheader("⚠️ Organization conflict scan")
    alerts = service.scan_conflicts()
    if not alerts:
        st.success("No conflict pairs among active members.")
    else:
        for alert in alerts:
            icon = "🔴" if alert.severity == "CRITICAL" else "🟠"
            st.markdown(
                f"{icon} **{alert.member_1.name}** ({alert.member_1.sign}) × "
                f"**{alert.member_2.name}** ({alert.member_2.sign}): {alert.compatibility_score}"
            )
            st.caption(alert.recommendation)

    st.subheader("🌟 Best member pairs")
    best_pairs = service.best_member_pairs()
    if best_pairs:
        fig_best = go.Figure(go.Bar(
            x=[f"{p.member_a_name} × {p.member_b_name}" for p in best_pairs],
            y=[p.score for p in best_pairs],
            text=[str(p.score) for p in best_pairs],
            textposition="outside",
            marker_color=[_score_color(p.score) for p in best_pairs],
        ))
        fig_best.update_layout(yaxis_range=[0, 105], height=380)
        st.plotly_chart(fig_best, use_container_width=True)


# =========================================================================
# Tab 5: Optimizer
# =========================================================================
with tab5:
    service = _get_service()
    active_members = service.directory.get_active_members()
    active_by_id = {m.id: m for m in active_members}
    pool_ids = st.multiselect(
        "Candidate pool",
        options=list(active_by_id),
        default=list(active_by_id),
        format_func=lambda mid: _member_label(active_by_id[mid]),
        key="pool_ids",
    )
    target = 2
    if len(pool_ids) < 2:
        st.warning("Select at least 2 candidates to build a team.")
    elif len(pool_ids) == 2:
        st.caption("Target team size: 2")
    else:
        target = st.slider("Target team size", min_value=2, max_value=len(pool_ids), value=min(4, len(pool_ids)))
    if len(pool_ids) >= 2 and st.button("🧩 Build optimal team", use_container_width=True):
        try:
            optimal = service.optimize_team(target, pool_ids)
        except AffinityError as e:
            logger.warning("Optimizer rejected request: %s", e)
            st.error(str(e))
        else:
            if optimal.team_size < target:
                st.warning(f"Only {optimal.team_size} of {target} members could be selected.")
            st.metric("Average affinity", f"{optimal.average_score}", help=str(optimal.level))
            for mid in optimal.member_ids:
                st.markdown(f"- {_member_label(active_by_id[mid])}")
            for line in optimal.insights:
                st.markdown(line)
