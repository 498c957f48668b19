"""Streamlit UI for the Bio-Genomic What-If Engine."""

import os

import py3Dmol
import requests
import streamlit as st
import streamlit.components.v1 as components

API_URL = os.environ.get("API_URL", "http://localhost:8000")
STRUCTURE_TIMEOUT = 30

DEPTH_LABELS = {
    "beginner": "Beginner",
    "medical_student": "Medical student",
    "researcher": "Researcher",
}

CONFIDENCE_LABELS = {
    "known": ("Known Mutation", "Well-documented in literature"),
    "well_characterized": ("Well Characterized", "Multiple studies support"),
    "speculative": ("Speculative", "Predicted based on reasoning"),
}

LEVEL_ICONS = {"molecular": "🧬", "thermodynamic": "🔥", "cellular": "🔬", "clinical": "🩺"}

GREETING = "Hello! How can I help you today?"

st.set_page_config(page_title="Bio-Genomic What-If Engine", layout="wide")
st.title("Bio-Genomic What-If Engine")
st.markdown("From code to consequence: Gemini reasons through the physical reality of genetic mutations")
st.divider()

try:
    requests.get(f"{API_URL}/health", timeout=5)
except Exception:
    st.error(f"Could not connect to API at {API_URL}. Is the FastAPI server running?")
    st.stop()


def _error_text(resp) -> str:
    try:
        return resp.json().get("error", resp.text)
    except ValueError:
        return resp.text


@st.cache_data(ttl=86400, show_spinner=False)
def fetch_structure(pdb_id: str) -> str | None:
    resp = requests.get(f"{API_URL}/structure/{pdb_id}", timeout=STRUCTURE_TIMEOUT)
    if resp.status_code != 200:
        return None
    return resp.text


def render_structure(pdb_id: str | None):
    st.subheader("3D Structure")
    if not pdb_id:
        st.info("No PDB structure was suggested for this mutation.")
        return
    st.caption(f"PDB: {pdb_id}")
    try:
        pdb_text = fetch_structure(pdb_id)
    except requests.exceptions.Timeout:
        st.warning("Timed out loading the structure from RCSB.")
        return
    if not pdb_text:
        st.warning(f"Could not load structure {pdb_id}.")
        return
    view = py3Dmol.view(width=720, height=400)
    view.addModel(pdb_text, "pdb")
    view.setStyle({"cartoon": {"color": "spectrum", "thickness": 0.6}})
    view.setBackgroundColor("0x0d1117")
    view.zoomTo()
    components.html(view._make_html(), height=420)


def render_severity(scores: list[dict]):
    st.subheader("Severity Scores")
    if not scores:
        st.caption("Severity scores will appear after analysis")
        return
    for s in scores:
        score = min(max(float(s.get("score", 0)), 0.0), 10.0)
        st.markdown(f"**{s.get('name', '')}** · {score:g}/10")
        st.progress(score / 10)
        if s.get("description"):
            st.caption(s["description"])


def render_confidence(confidence: dict | None):
    if not confidence:
        return
    label, desc = CONFIDENCE_LABELS.get(confidence.get("classification"), CONFIDENCE_LABELS["speculative"])
    score = min(max(float(confidence.get("score", 0)), 0.0), 100.0)
    st.subheader("Confidence")
    st.metric(label, f"{score:g}%")
    st.progress(score / 100)
    st.caption(desc)
    if confidence.get("dataBacked"):
        st.success("Data-backed prediction")
    if confidence.get("uncertaintyNote"):
        st.markdown(f"*{confidence['uncertaintyNote']}*")


def render_bullets(title: str, items: list[str]):
    if items:
        st.markdown(f"**{title}**")
        st.markdown("\n".join(f"- {item}" for item in items))


def render_analysis(result: dict):
    st.success(result["mutationSummary"])
    if result.get("affectedResidue"):
        st.code(result["affectedResidue"], language=None)

    col_view, col_reason = st.columns([2, 1])
    with col_view:
        render_structure(result.get("pdbId"))
    with col_reason:
        st.subheader("Reasoning")
        for i, step in enumerate(result.get("chainOfThought", []), 1):
            st.markdown(f"`{i:02d}` {step}")

    col_impact, col_scores = st.columns([2, 1])
    with col_impact:
        st.subheader("Impact Map")
        for item in result.get("impactMap", []):
            with st.expander(f"{LEVEL_ICONS.get(item['level'], '')} {item['title']}", expanded=True):
                st.markdown(item["insight"])
                if item.get("visualHint"):
                    st.caption(item["visualHint"])
    with col_scores:
        render_severity(result.get("severityScores", []))
        render_confidence(result.get("confidence"))

    if result.get("cascadeSteps"):
        st.subheader("Cascade: from code to consequence")
        for step in sorted(result["cascadeSteps"], key=lambda s: s["step"]):
            icon = step.get("icon") or "▸"
            st.markdown(f"{icon} **{step['step']}. {step['scale']}**: {step['description']}")

    col_patient, col_research = st.columns(2)
    with col_patient:
        scenario = result.get("patientScenario")
        if scenario:
            st.subheader("Patient Scenario")
            if scenario.get("patientAge"):
                st.markdown(f"**Typical age:** {scenario['patientAge']}")
            render_bullets("Presenting symptoms", scenario.get("presentingSymptoms", []))
            render_bullets("Lab findings", scenario.get("labFindings", []))
            if scenario.get("diseaseProgression"):
                st.markdown(f"**Progression:** {scenario['diseaseProgression']}")
            render_bullets("Treatment challenges", scenario.get("treatmentChallenges", []))
            render_bullets("Long-term complications", scenario.get("longTermComplications", []))
    with col_research:
        context = result.get("researchContext")
        if context:
            st.subheader("Research Context")
            render_bullets("Related diseases", context.get("relatedDiseases", []))
            render_bullets("Similar mutations", context.get("similarMutations", []))
            render_bullets("Research opportunities", context.get("researchOpportunities", []))
            render_bullets("Experimental questions", context.get("experimentalQuestions", []))


tab_analyze, tab_chat = st.tabs(["Mutation Analysis", "Chat"])


# -- Mutation Analysis Tab --

with tab_analyze:
    try:
        options = requests.get(f"{API_URL}/presets", timeout=5).json()
        presets = options["presets"]
        depths = options["depths"]
    except Exception:
        st.error("Could not fetch presets.")
        presets = [{"label": "Custom mutation", "value": ""}]
        depths = list(DEPTH_LABELS)

    col1, col2 = st.columns([1, 3])
    with col1:
        preset_label = st.radio("Preset", [p["label"] for p in presets])
        depth = st.selectbox(
            "Explanation depth",
            depths,
            index=depths.index("researcher") if "researcher" in depths else 0,
            format_func=lambda d: DEPTH_LABELS.get(d, d),
        )
    with col2:
        preset_value = next(p["value"] for p in presets if p["label"] == preset_label)
        mutation = st.text_area(
            "Mutation",
            value=preset_value,
            placeholder="e.g. Perform a missense mutation on the HBB gene...",
            height=100,
        )
        run_button = st.button(
            "Run Analysis", type="primary", disabled=not mutation.strip(), use_container_width=True
        )

    if run_button:
        with st.spinner("Analyzing..."):
            try:
                resp = requests.post(
                    f"{API_URL}/analyze",
                    json={"mutation": mutation.strip(), "explanationDepth": depth},
                    timeout=120,
                )
                if resp.status_code == 200:
                    st.session_state.analysis = resp.json()
                else:
                    st.session_state.analysis = None
                    st.error(f"API error: {resp.status_code} - {_error_text(resp)}")
            except requests.exceptions.Timeout:
                st.error("Request timed out. The analysis may take longer for complex mutations.")
            except Exception as e:
                st.error(f"Error: {str(e)}")

    if st.session_state.get("analysis"):
        st.divider()
        render_analysis(st.session_state.analysis)
    elif not run_button:
        st.info("Pick a preset or describe a mutation, then click 'Run Analysis'.")


# -- Chat Tab --

with tab_chat:
    st.subheader("Ask Gemini")

    if "chat_messages" not in st.session_state:
        st.session_state.chat_messages = [{"role": "assistant", "content": GREETING}]

    if st.button("New Chat", key="new_chat"):
        st.session_state.chat_messages = [{"role": "assistant", "content": GREETING}]
        st.rerun()

    chat_container = st.container()
    user_input = st.chat_input("Ask a follow-up question...")

    with chat_container:
        for msg in st.session_state.chat_messages:
            with st.chat_message(msg["role"]):
                st.markdown(msg["content"])

        if user_input:
            with st.chat_message("user"):
                st.markdown(user_input)

            with st.chat_message("assistant"):
                with st.spinner("Thinking..."):
                    try:
                        resp = requests.post(
                            f"{API_URL}/chat",
                            json={
                                "message": user_input,
                                "history": st.session_state.chat_messages,
                            },
                            timeout=60,
                        )

                        if resp.status_code == 200:
                            answer = resp.json()["message"]
                            st.markdown(answer)
                            st.session_state.chat_messages.append({"role": "user", "content": user_input})
                            st.session_state.chat_messages.append({"role": "assistant", "content": answer})
                        else:
                            st.error(f"API error: {resp.status_code} - {_error_text(resp)}")

                    except requests.exceptions.Timeout:
                        st.error("Request timed out. Try a simpler question.")
                    except Exception as e:
                        st.error(f"Error: {str(e)}")
