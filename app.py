"""Streamlit dashboard for the Decision Engine."""

import uuid
import time

import streamlit as st
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from decision_engine.config.settings import settings
from decision_engine.models.scenario import DecisionScenario, InvalidInputError
from decision_engine.models.variables import DEFAULT_ASSUMPTIONS, default_variables
from decision_engine.simulation.engine import SimulationEngine
from decision_engine.analytics.sensitivity import SensitivityAnalyzer
from decision_engine.utils.logging import setup_logger


logger = setup_logger("decision_engine", level=settings.log_level, log_file=settings.log_file)

st.set_page_config(
    page_title="Decision Simulator",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main > div {
        padding-top: 2rem;
    }
    .stMetric {
        background-color: rgba(255, 255, 255, 0.05);
        border: 1px solid rgba(255, 255, 255, 0.1);
        padding: 0.5rem;
        border-radius: 0.5rem;
    }
</style>
""", unsafe_allow_html=True)


st.title("Decision Simulator")
st.caption("Monte Carlo outcomes, trajectories and risk for a two-option decision.")
st.markdown("---")


st.sidebar.header("Decision")

title = st.sidebar.text_input("Title", value="Learning plan")
option_a = st.sidebar.text_input("Option A", value="Self-study")
option_b = st.sidebar.text_input("Option B", value="Bootcamp")
time_horizon = st.sidebar.slider(
    "Horizon (weeks)",
    min_value=1,
    max_value=52,
    value=12,
    step=1
)

st.sidebar.markdown("---")
st.sidebar.subheader("Variables")

variables = default_variables()
for name, variable in variables.items():
    value = st.sidebar.slider(
        variable.label,
        min_value=float(variable.min),
        max_value=float(variable.max),
        value=float(variable.value),
        step=float(variable.step),
        help=variable.description
    )
    variables[name] = variable.with_value(value)

with st.sidebar.expander("Simulation", expanded=False):
    n_iterations = st.slider(
        "Iterations",
        min_value=100,
        max_value=5000,
        value=settings.n_iterations,
        step=100,
        help="Terminal-week Monte Carlo samples per option."
    )
    sensitivity_iterations = st.slider(
        "Sensitivity iterations",
        min_value=20,
        max_value=1000,
        value=settings.sensitivity_iterations,
        step=20,
        help="Samples behind each baseline and perturbed mean."
    )

with st.sidebar.expander("Assumptions", expanded=False):
    for assumption in DEFAULT_ASSUMPTIONS:
        st.markdown(f"- {assumption.text}")

run_clicked = st.sidebar.button(
    "Run Simulation", type="primary", width="stretch")


OPTION_COLORS = ["rgb(55, 83, 109)", "rgb(26, 118, 255)"]
BAND_COLORS = {
    "Excellent": "rgb(44, 160, 44)",
    "Good": "rgb(31, 119, 180)",
    "Moderate": "rgb(255, 127, 14)",
    "Poor": "rgb(214, 39, 40)",
}


if run_clicked:

    if not option_a.strip() or not option_b.strip():
        st.error("Please enter both options.")
        st.stop()

    scenario = DecisionScenario(
        scenario_id=str(uuid.uuid4()),
        title=title.strip() or "Untitled decision",
        option_a=option_a.strip(),
        option_b=option_b.strip(),
        time_horizon_weeks=time_horizon,
        variables=variables,
        assumptions=list(DEFAULT_ASSUMPTIONS)
    )

    sim_start = time.time()
    with st.spinner("Running Monte Carlo simulation..."):
        engine = SimulationEngine(n_iterations=n_iterations)
        try:
            decision = engine.run_decision(scenario)
        except InvalidInputError as exc:
            st.error(f"Invalid input: {exc}")
            st.stop()
    sim_time = time.time() - sim_start

    st.success(
        f"Simulated {scenario.option_a} and {scenario.option_b} "
        f"({n_iterations} iterations each) in {sim_time:.2f}s")

    comparison = decision.compare()
    preferred = comparison.preferred_option()

    st.markdown(f"## {scenario.title}")

    st.info("""
    **Understanding the Results:**

    - **Outcome score**: A synthetic 0-100 measure of success at the end of the horizon
    - **Bands**: Excellent (90+), Good (75-90), Moderate (60-75), Poor (below 60)
    - **Confidence**: Heuristic score from outcome dispersion, between 50% and 95%. Not a statistical confidence interval
    - **Risks**: Burnout, dropout, plateau and success are scored independently and need not sum to 100%
    """)

    col1, col2 = st.columns(2)
    for col, result in zip((col1, col2), decision.results()):
        dist = result.outcome_distribution
        with col:
            st.markdown(f"### {result.option_name}")
            m1, m2, m3 = st.columns(3)
            with m1:
                st.metric("Mean Outcome", f"{dist.mean:.1f}")
            with m2:
                st.metric("Std Dev", f"{dist.std_dev:.1f}")
            with m3:
                st.metric("Confidence", f"{result.confidence_level:.0%}")

    if preferred:
        st.markdown(f"**Favoured by more metrics:** {preferred}")
    else:
        st.markdown("**Metrics split evenly between the two options.**")

    st.markdown("---")

    tab1, tab2, tab3, tab4 = st.tabs(
        ["Outcome Distribution", "Timeline", "Risk Breakdown", "Sensitivity"])

    with tab1:
        st.subheader("Outcome Bands")

        fig = go.Figure()
        for color, result in zip(OPTION_COLORS, decision.results()):
            dist = result.outcome_distribution
            fig.add_trace(go.Bar(
                x=list(BAND_COLORS.keys()),
                y=[dist.excellent, dist.good, dist.moderate, dist.poor],
                name=result.option_name,
                marker_color=color
            ))
        fig.update_layout(
            barmode="group",
            title="Probability of Each Outcome Band",
            xaxis_title="Band",
            yaxis_title="Probability (%)",
            height=450
        )
        st.plotly_chart(fig, width="stretch")

        st.markdown("#### Side-by-Side Comparison")
        st.dataframe(comparison.to_frame(), width="stretch")

    with tab2:
        st.subheader("Representative Trajectory")
        st.caption(
            "One stochastic path per option. It is drawn independently of the "
            "terminal distribution above."
        )

        fig = make_subplots(rows=2, cols=1,
                            subplot_titles=[r.option_name for r in decision.results()])

        metrics = ["motivation", "skill", "stress", "consistency", "outcome"]
        for row, result in enumerate(decision.results(), start=1):
            weeks = [p.week for p in result.timeline_data]
            for metric in metrics:
                fig.add_trace(go.Scatter(
                    x=weeks,
                    y=[getattr(p, metric) for p in result.timeline_data],
                    mode="lines+markers",
                    name=metric.capitalize(),
                    legendgroup=metric,
                    showlegend=(row == 1),
                    line=dict(width=3 if metric == "outcome" else 1.5)
                ), row=row, col=1)

        fig.update_xaxes(title_text="Week", row=2, col=1)
        fig.update_yaxes(range=[0, 100])
        fig.update_layout(height=700, title_text="Weekly Metrics")
        st.plotly_chart(fig, width="stretch")

    with tab3:
        st.subheader("Risk Breakdown")

        risk_labels = ["Burnout", "Dropout", "Plateau", "Success"]
        fig = go.Figure()
        for color, result in zip(OPTION_COLORS, decision.results()):
            risks = result.risk_breakdown
            fig.add_trace(go.Bar(
                x=risk_labels,
                y=[risks.burnout, risks.dropout, risks.plateau, risks.success],
                name=result.option_name,
                marker_color=color
            ))
        fig.update_layout(
            barmode="group",
            title="Risk Profile",
            yaxis_title="Score (%)",
            yaxis_range=[0, 100],
            height=450
        )
        st.plotly_chart(fig, width="stretch")

    with tab4:
        st.subheader("Sensitivity Analysis")

        with st.spinner("Perturbing variables..."):
            analyzer = SensitivityAnalyzer(n_iterations=sensitivity_iterations)
            analysis = analyzer.analyze(variables, time_horizon, parallel=True)

        table = SensitivityAnalyzer.to_dataframe_compatible(analysis)

        fig = go.Figure()
        fig.add_trace(go.Bar(
            y=table["variable"],
            x=table["decrease_delta"],
            orientation="h",
            name=f"-{settings.perturbation_pct:.0f}%",
            marker_color="rgb(214, 39, 40)"
        ))
        fig.add_trace(go.Bar(
            y=table["variable"],
            x=table["increase_delta"],
            orientation="h",
            name=f"+{settings.perturbation_pct:.0f}%",
            marker_color="rgb(44, 160, 44)"
        ))
        fig.update_layout(
            barmode="overlay",
            title="Change in Mean Outcome per Variable",
            xaxis_title="Change vs Baseline",
            yaxis=dict(autorange="reversed"),
            height=450
        )
        st.plotly_chart(fig, width="stretch")

        st.markdown("#### Top Influencers:")
        for rank, result in enumerate(analysis.top_influencers, start=1):
            st.markdown(f"{rank}. **{result.variable_label}** (impact {result.impact:.2f})")

else:

    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        st.markdown("""
        ## Welcome to the Decision Simulator

        Describe your two options in the sidebar to begin.

        ### Quick Start:
        1. Name the decision and both options
        2. Set the horizon and adjust the variables
        3. Click "Run Simulation"

        The dashboard runs a Monte Carlo simulation for each option and shows outcome bands, a weekly trajectory, risks and the variables that matter most.
        """)
