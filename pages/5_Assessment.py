"""
Water quality assessment - heuristic scoring of environmental readings.
"""

import streamlit as st
import pandas as pd
import plotly.express as px

from core.theme import get_page_config, inject_theme, section_header

st.set_page_config(**get_page_config("Assessment"))
inject_theme()

from core.auth import require_user
from core.assessment import DEFAULT_READING, get_assessor
from core.models import Reading

require_user()

st.title("🧪 Water Quality Assessment")
st.info("Simulated assessment: a fixed demonstration formula, not a trained model.")

section_header("Readings", "Leave a field empty to use its typical value.")

c1, c2, c3, c4, c5 = st.columns(5)
ph = c1.number_input("pH", value=None, placeholder=str(DEFAULT_READING["ph"]), step=0.1)
turbidity = c2.number_input("Turbidity (NTU)", value=None, placeholder=str(DEFAULT_READING["turbidity"]), min_value=0.0)
oxygen = c3.number_input("Dissolved O₂ (mg/L)", value=None, placeholder=str(DEFAULT_READING["dissolved_oxygen"]), min_value=0.0)
temperature = c4.number_input("Temperature (°C)", value=None, placeholder=str(DEFAULT_READING["temperature"]), step=0.5)
conductivity = c5.number_input("Conductivity (µS/cm)", value=None, placeholder=str(DEFAULT_READING["conductivity"]), min_value=0.0)

assessor = get_assessor()
result = assessor.assess(Reading(
    ph=ph,
    turbidity=turbidity,
    dissolved_oxygen=oxygen,
    temperature=temperature,
    conductivity=conductivity,
))

st.markdown("---")
m1, m2 = st.columns(2)
m1.metric("Score", f"{result.score:.3f}")
m2.metric("Category", result.label)

col1, col2 = st.columns(2)

with col1:
    st.subheader("📊 Category probabilities")
    df_prob = pd.DataFrame({"category": list(result.probabilities), "probability": list(result.probabilities.values())})
    fig = px.bar(df_prob, x="category", y="probability", color_discrete_sequence=["#0891b2"])
    fig.update_layout(height=320, margin=dict(l=20, r=20, t=20, b=20), yaxis_range=[0, 1])
    st.plotly_chart(fig, width="stretch")

with col2:
    st.subheader("🔍 Feature importance")
    st.dataframe(
        pd.DataFrame([
            {"feature": f.name, "value": f.value, "weight": f.weight}
            for f in result.important_features
        ]),
        width="stretch",
        hide_index=True,
    )

with st.expander("Details"):
    st.code(assessor.explain(result), language=None)
    st.caption(result.explanation)
