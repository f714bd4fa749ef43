"""Report text for scored assessments.

Provides the prose shown alongside a result:
- Per-dimension symptom descriptions
- Overall summary for abnormal results
- Disclaimer and targeted-intervention recommendation

Charts and printable exports are rendered by the caller.
"""

from dataclasses import dataclass, field

from childhealth.models.score import Instrument, SeverityLevel
from childhealth.scoring.result import ScoreResult

# Sentinel dimension selecting the overall summary text
OVERALL = "ALL"

DISCLAIMER = (
    "This result is for reference only; seek further assessment from a "
    "pediatrician or sensory integration therapist."
)

BEHAVIORAL_DESCRIPTIONS = {
    "ConductProblem": (
        "Defies authority, has temper outbursts, lies or behaves aggressively "
        "(fighting, breaking things), and struggles to follow social rules or "
        "group discipline."
    ),
    "LearningProblem": (
        "Inattentive in class, leaves homework unfinished, has uneven school "
        "performance and finds it hard to persist with mentally demanding "
        "tasks, sometimes with a sense of frustration."
    ),
    "Psychosomatic": (
        "Often complains of physical discomfort such as headaches or stomach "
        "aches, especially under pressure or before difficult tasks, possibly "
        "as a physical response to anxiety."
    ),
    "ImpulsiveHyperactive": (
        "Restless and unable to wait quietly, often interrupts others, acts "
        "without thinking of consequences, gets worked up easily and has weak "
        "self-control."
    ),
    "Anxiety": (
        "Worries excessively, is shy and sensitive, fears new places or "
        "strangers, feels insecure easily and may show compulsive behavior."
    ),
    "HyperactivityIndex": (
        "Summarizes the core symptoms of hyperactivity. A high score usually "
        "calls for further professional clinical assessment."
    ),
}

BEHAVIORAL_FALLBACK = (
    "The score on this dimension suggests some behavioral deviation; observe "
    "and guide the child in concrete everyday situations."
)

SENSORY_DESCRIPTIONS = {
    "VestibularBalance": (
        "Vestibular imbalance: restless and inattentive, enjoys spinning "
        "without getting dizzy or is unusually afraid of dizziness. Falls "
        "easily, has a poor sense of direction and skips lines or words when "
        "reading."
    ),
    "NeuralInhibition": (
        "Difficulty with neural inhibition: lacks confidence, is shy and timid, "
        "afraid of the dark, clingy and slow to adapt to new surroundings. "
        "Excited easily and low easily."
    ),
    "TactileDefensiveness": (
        "Tactile over-defensiveness: oversensitive to touch, dislikes being "
        "touched, is a picky eater, rejects certain clothing textures, and is "
        "emotionally unstable with frequent tantrums."
    ),
    "DevelopmentalDyspraxia": (
        "Developmental dyspraxia: poor gross and fine motor development, "
        "clumsy movement and slow to learn new actions such as tying laces, "
        "using chopsticks or skipping rope. Weak self-care skills."
    ),
    "VisualSpatial": (
        "Visual-spatial perception difficulty: poor visual discrimination, "
        "struggles with puzzles and building blocks, writes outside the lines, "
        "reverses character parts and has trouble recognizing characters."
    ),
    "Proprioception": (
        "Proprioception (gravitational insecurity): extreme fear of heights "
        "and movement, avoids playground equipment and is tense on stairs. "
        "Stiff movement and poor body control can lead to withdrawal."
    ),
    "EmotionalSocial": (
        "Emotional and social interaction problems: at school age shows poor "
        "emotional control, irritability, fighting and name-calling, or seems "
        "absent-minded and unable to concentrate."
    ),
    "StressResilience": (
        "Stress and frustration tolerance: low self-esteem, feels inferior to "
        "others, gives up or resists easily when facing difficulty and needs "
        "more encouragement."
    ),
}

SENSORY_FALLBACK = (
    "Several signs of sensory integration dysfunction are present: the brain "
    "does not process sensory information effectively, leading to difficulties "
    "with emotion, attention and motor coordination."
)


def get_symptom_description(instrument: Instrument, dimension: str) -> str:
    """Describe what an abnormal score on a dimension looks like.

    Args:
        instrument: Instrument the dimension belongs to
        dimension: Dimension key, or OVERALL for the overall summary

    Returns:
        Description text; unknown dimensions and OVERALL get the
        instrument's generic text
    """
    if Instrument(instrument) == Instrument.BEHAVIORAL:
        return BEHAVIORAL_DESCRIPTIONS.get(dimension, BEHAVIORAL_FALLBACK)
    return SENSORY_DESCRIPTIONS.get(dimension, SENSORY_FALLBACK)


@dataclass
class DimensionFinding:
    """A dimension classified above NORMAL."""
    dimension: str
    level: SeverityLevel
    score: float
    description: str


@dataclass
class ReportSummary:
    """Text content of a result report."""
    instrument: Instrument
    total_level: SeverityLevel
    total_score: float
    is_abnormal: bool
    overall_summary: str | None
    findings: list[DimensionFinding] = field(default_factory=list)
    disclaimer: str = DISCLAIMER
    recommendation: str | None = None

    def to_text(self) -> str:
        """Render the summary as plain text lines."""
        lines = [f"Overall level: {self.total_level.label} (score {self.total_score})"]
        if self.overall_summary:
            lines.append(f"Overall: {self.total_level.label} - {self.overall_summary}")
        for finding in self.findings:
            lines.append(
                f"{finding.dimension} ({finding.level.label}, {finding.score}): "
                f"{finding.description}"
            )
        lines.append(self.disclaimer)
        if self.recommendation:
            lines.append(self.recommendation)
        return "\n".join(lines)


def build_report(result: ScoreResult) -> ReportSummary:
    """Assemble the report text for a scored assessment.

    The overall summary, findings and recommendation are only filled in
    when the total level is abnormal.
    """
    is_abnormal = result.total_level.is_abnormal
    if not is_abnormal:
        return ReportSummary(
            instrument=result.instrument,
            total_level=result.total_level,
            total_score=result.total_score,
            is_abnormal=False,
            overall_summary=None,
        )

    abnormal = result.abnormal_dimensions
    findings = [
        DimensionFinding(
            dimension=dimension,
            level=result.dimension_levels[dimension],
            score=result.dimension_scores[dimension],
            description=get_symptom_description(result.instrument, dimension),
        )
        for dimension in abnormal
    ]

    recommendation = None
    if abnormal:
        recommendation = (
            f"Targeted professional training is recommended as early as possible "
            f"for the abnormal dimensions: {', '.join(abnormal)}."
        )

    return ReportSummary(
        instrument=result.instrument,
        total_level=result.total_level,
        total_score=result.total_score,
        is_abnormal=True,
        overall_summary=get_symptom_description(result.instrument, OVERALL),
        findings=findings,
        recommendation=recommendation,
    )
