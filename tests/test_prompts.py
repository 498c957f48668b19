"""Tests for the analysis prompt templates."""

from biowhatif.prompts import DEPTH_INSTRUCTIONS, build_analysis_prompt, build_system_prompt


class TestBuildSystemPrompt:
    def test_each_depth_is_framed(self):
        for depth, guide in DEPTH_INSTRUCTIONS.items():
            assert guide in build_system_prompt(depth)

    def test_unknown_depth_falls_back_to_researcher(self):
        assert build_system_prompt("toddler") == build_system_prompt("researcher")

    def test_describes_response_schema(self):
        prompt = build_system_prompt("researcher")
        for key in ("chainOfThought", "impactMap", "severityScores", "mutationSummary",
                    "pdbId", "cascadeSteps", "patientScenario", "researchContext", "confidence"):
            assert f'"{key}"' in prompt
        assert "{{" not in prompt


class TestBuildAnalysisPrompt:
    def test_wraps_trimmed_mutation(self):
        prompt = build_analysis_prompt("\n  BRCA1 c.68_69delAG \n", "medical_student")
        assert 'User mutation input:\n"BRCA1 c.68_69delAG"' in prompt
        assert DEPTH_INSTRUCTIONS["medical_student"] in prompt
        assert prompt.endswith("Respond with the JSON analysis only.")
