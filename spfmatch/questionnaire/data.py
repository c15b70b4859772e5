"""
Questionnaire Data

The fixed SPFMatch question set, Fitzpatrick score thresholds and the
presentation copy for each classification.

Scoring questions come first, then the skin-type categorizer, then the
free-preference questions. Option order is the scoring order.
"""

from types import MappingProxyType

from .models import FitzpatrickInfo, Question


NO_PREFERENCE = "Anything is fine"
SKIN_TYPE_QUESTION_ID = "skinType"

_ZERO_TO_FOUR = [0, 1, 2, 3, 4]


QUESTIONNAIRE_QUESTIONS = (
    Question(
        id="eyeColor",
        question="What color are your eyes?",
        options=[
            "Light blue, gray or green",
            "Blue, gray, or green",
            "Blue",
            "Dark Brown",
            "Brownish Black",
        ],
        scores=_ZERO_TO_FOUR,
    ),
    Question(
        id="hairColor",
        question="What is the natural color of your hair?",
        options=[
            "Sandy red",
            "Blonde",
            "Chestnut/ Dark Blonde",
            "Dark brown",
            "Black",
        ],
        scores=_ZERO_TO_FOUR,
    ),
    Question(
        id="skinColor",
        question="What color is your skin in places where it is not exposed to the sun?",
        options=[
            "Reddish",
            "Very Pale",
            "Pale with a beige tint",
            "Light brown",
            "Dark brown",
        ],
        scores=_ZERO_TO_FOUR,
    ),
    Question(
        id="freckles",
        question="Do you have freckles on unexposed areas?",
        options=["Many", "Several", "Few", "Incidental", "None"],
        scores=_ZERO_TO_FOUR,
    ),
    Question(
        id="sunReaction",
        question="What happens when you stay too long in the sun?",
        options=[
            "Painful redness, blistering, peeling",
            "Blistering followed by peeling",
            "Burns sometimes followed by peeling",
            "Rare burns",
            "Never had burns",
        ],
        scores=_ZERO_TO_FOUR,
    ),
    Question(
        id="tanningDegree",
        question="To what degree do you turn brown?",
        options=[
            "Hardly or not at all",
            "Light color tan",
            "Reasonable tan",
            "Tan very easily",
            "Turn dark brown quickly",
        ],
        scores=_ZERO_TO_FOUR,
    ),
    Question(
        id="tanningHours",
        question="Do you turn brown after several hours of sun exposure?",
        options=["Never", "Seldom", "Sometimes", "Often", "Always"],
        scores=_ZERO_TO_FOUR,
    ),
    Question(
        id="faceReaction",
        question="How does your face react to the sun?",
        options=[
            "Very sensitive",
            "Sensitive",
            "Normal",
            "Very resistant",
            "Never had a problem",
        ],
        scores=_ZERO_TO_FOUR,
    ),
    Question(
        id="lastExposure",
        question="When did you last expose your body to the sun?",
        options=[
            "More than 3 months ago",
            "2-3 months ago",
            "1-2 months ago",
            "Less than a month ago",
            "Less than 2 weeks ago",
        ],
        scores=_ZERO_TO_FOUR,
    ),
    Question(
        id="faceExposure",
        question="Do you expose your face, or the area to be treated, to the sun?",
        options=["Never", "Hardly ever", "Sometimes", "Often", "Always"],
        scores=_ZERO_TO_FOUR,
    ),
    Question(
        id=SKIN_TYPE_QUESTION_ID,
        question="Which of the following best describes your facial skin?",
        options=[
            "Hydrated and comfortable",
            "Shiny and greasy",
            "Flaky, rough, and tight, sometimes itchy or irritated",
            "Oily in some areas and dry in other areas",
            "Often stings or turns red in response to irritants",
        ],
        types=["normal", "oily", "dry", "combination", "sensitive"],
    ),
    # Preference questions (multi choice, never scored)
    Question(
        id="filterType",
        question="Which sunscreen filter type would you like?",
        options=["Physical", "Chemical", "Mixture", NO_PREFERENCE],
    ),
    Question(
        id="tint",
        question="Which sunscreen tint would you like?",
        options=["Skin-colored", "Transparent", "No tint", NO_PREFERENCE],
    ),
    Question(
        id="vehicle",
        question="Which form of sunscreen would you like?",
        options=["Cream/lotion", "Spray", "Powder", NO_PREFERENCE],
    ),
)


# Inclusive upper bound of each band, ascending. Anything above -> type 6.
FITZPATRICK_THRESHOLDS = (
    (1, 7),
    (2, 16),
    (3, 25),
    (4, 30),
    (5, 34),
)


FITZPATRICK_INFO = MappingProxyType({
    1: FitzpatrickInfo(
        name="Type I",
        description="Very fair skin, always burns, never tans. Extremely sensitive to sun exposure.",
    ),
    2: FitzpatrickInfo(
        name="Type II",
        description="Fair skin, usually burns, tans minimally. Very sensitive to sun exposure.",
    ),
    3: FitzpatrickInfo(
        name="Type III",
        description="Medium skin, sometimes burns, tans gradually. Moderately sensitive to sun.",
    ),
    4: FitzpatrickInfo(
        name="Type IV",
        description="Olive skin, rarely burns, tans easily. Less sensitive to sun exposure.",
    ),
    5: FitzpatrickInfo(
        name="Type V",
        description="Brown skin, very rarely burns, tans very easily. Minimally sensitive to sun.",
    ),
    6: FitzpatrickInfo(
        name="Type VI",
        description="Dark brown to black skin, never burns, deeply pigmented. Least sensitive to sun.",
    ),
})


SKIN_TYPE_INFO = MappingProxyType({
    "normal": (
        "Your skin is well-balanced, neither too oily nor too dry. "
        "Look for lightweight, non-comedogenic formulas."
    ),
    "oily": (
        "Your skin produces excess sebum. "
        "Look for oil-free, mattifying sunscreens that won't clog pores."
    ),
    "dry": (
        "Your skin lacks moisture and may feel tight. "
        "Look for hydrating sunscreens with moisturizing ingredients."
    ),
    "combination": (
        "Your skin is oily in some areas and dry in others. "
        "Look for balanced formulas that won't over-dry or make you greasy."
    ),
    "sensitive": (
        "Your skin is prone to irritation. "
        "Look for mineral-based, fragrance-free sunscreens with gentle ingredients."
    ),
})
