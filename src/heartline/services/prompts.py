"""Prompt builders — one plain formatting function per task.

Every prompt embeds its structured inputs and ends with an instruction to
return only a JSON object of a stated shape; the matching decoder lives in
:mod:`heartline.services.decoders`.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from heartline.domain.profile import MatchProfile, UserProfile
from heartline.domain.value_objects import ZodiacSign

# ── Shared fragments ────────────────────────────────────────────────────────

_JSON_ONLY = "Return ONLY valid JSON in this exact format (no other text):"

COMPATIBILITY_SHAPE = """\
{
  "results": [
    {
      "matchId": "string",
      "score": number (0-1),
      "explanation": "string - 2-3 sentences explaining why this score",
      "keyFactors": ["factor 1", "factor 2", "factor 3"]
    }
  ]
}"""

HOROSCOPE_SHAPE = """\
{
  "reading": "string - the horoscope text"
}"""

SYNASTRY_SHAPE = """\
{
  "compatibility": "string - Excellent/Good/Moderate/Challenging",
  "explanation": "string - the explanation"
}"""

ICEBREAKER_SHAPE = """\
{
  "message": "string - the icebreaker message"
}"""

BIO_SHAPE = """\
{
  "bio": "string - the bio text"
}"""

CONSISTENCY_SHAPE = """\
{
  "score": number (0-100),
  "flags": ["short description of each inconsistency"]
}"""

MATCHES_SHAPE = """\
{
  "matches": [
    {
      "id": "string - unique, e.g. match-1",
      "name": "string",
      "bio": "string",
      "birthDate": "YYYY-MM-DD",
      "values": ["string"],
      "interests": ["string"],
      "lifestyle": ["string"],
      "workSchedule": "string",
      "industry": "string",
      "education": "string",
      "languages": ["string"],
      "lookingFor": "string"
    }
  ]
}"""

TIPS_SHAPE = """\
{
  "tips": [
    {
      "id": "string",
      "category": "conversation" | "firstDate" | "relationship" | "selfGrowth",
      "title": "string",
      "content": "string - 2-3 sentences",
      "emoji": "string - a single emoji"
    }
  ]
}"""

INSIGHT_SHAPE = """\
{
  "title": "string - a short name for their relationship style",
  "description": "string - 2-3 sentences",
  "strengths": ["string"],
  "growthAreas": ["string"],
  "weeklyChallenge": "string - one concrete challenge for this week"
}"""

# Questionnaire answers used by bio, consistency, tips and insight prompts.
_ANSWER_FIELDS: tuple[str, ...] = (
    "values", "interests", "lifestyle", "industry", "education", "languages",
    "friendsDescribe", "proudestAchievement", "plannerOrSpontaneous",
    "stressReaction", "whatMakesYouLaugh", "coreValue", "introExtrovert",
    "biggestFlaw", "perfectDay", "morningOrNight", "exerciseHabit",
    "weekendActivity", "pets", "cookOrEatOut", "smokingDrinking",
    "spirituality", "passionateAboutWork", "biggestDream",
    "financialImportance", "travelExperience", "lookingFor",
    "healthyRelationship", "partnerQuality", "conflictStyle", "loveLanguage",
    "wantChildren", "attractiveQuality", "dealBreaker", "longDistance",
    "fidelityView", "paceInRelationship", "personalSpace", "lifeAsMovie",
    "surprisingFact", "ifCouldntFail",
)


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _answers(profile: UserProfile) -> dict[str, Any]:
    data = profile.to_prompt_dict()
    return {k: data[k] for k in _ANSWER_FIELDS if data.get(k) not in (None, "", [])}


# ── Task prompts ────────────────────────────────────────────────────────────


def compatibility_prompt(user: UserProfile, matches: Sequence[MatchProfile]) -> str:
    criteria = [
        "- Shared values and interests (weighted high)",
        "- Compatible work schedules and industries",
        "- Language compatibility",
        "- Lifestyle alignment",
        "- Educational background compatibility",
    ]
    if user.opt_in_astrology and user.birth_date:
        sign = ZodiacSign.from_birth_date(user.birth_date)
        criteria.append(f"- Astrological compatibility (user is {sign.value})")
    if user.opt_in_salary and user.salary_range:
        criteria.append("- Salary range alignment (if both provided)")
    criteria.append("- Overall personality and communication style fit")

    return (
        "You are an expert dating compatibility analyst. Analyze the user's "
        "profile against potential matches and calculate compatibility scores.\n\n"
        f"User Profile:\n{_dumps(user.to_prompt_dict())}\n\n"
        f"Potential Matches:\n{_dumps([m.to_prompt_dict() for m in matches])}\n\n"
        "For each match, calculate a compatibility score from 0 to 1 based on:\n"
        + "\n".join(criteria)
        + "\n\nProvide a detailed explanation for each match score, highlighting "
        "2-4 key compatibility factors. Use each match's \"id\" as its matchId.\n\n"
        f"{_JSON_ONLY}\n{COMPATIBILITY_SHAPE}"
    )


def horoscope_prompt(birth_date: str, sign: ZodiacSign) -> str:
    return (
        f"Generate a personalized daily horoscope for someone born on "
        f"{birth_date} ({sign.value}).\n\n"
        "Make it:\n"
        "- Specific and actionable (not generic)\n"
        "- Positive and encouraging\n"
        "- Related to love, career, or personal growth\n"
        "- 3-4 sentences long\n\n"
        f"{_JSON_ONLY}\n{HOROSCOPE_SHAPE}"
    )


def synastry_prompt(
    user_birth_date: str,
    user_sign: ZodiacSign,
    match_birth_date: str,
    match_sign: ZodiacSign,
) -> str:
    return (
        "Analyze the astrological compatibility (synastry) between:\n"
        f"- Person 1: {user_sign.value} (born {user_birth_date})\n"
        f"- Person 2: {match_sign.value} (born {match_birth_date})\n\n"
        "Provide:\n"
        "1. Overall compatibility rating (Excellent/Good/Moderate/Challenging)\n"
        "2. A 3-4 sentence explanation of their romantic compatibility based on sun signs\n\n"
        f"{_JSON_ONLY}\n{SYNASTRY_SHAPE}"
    )


def icebreaker_prompt(user: UserProfile, match: MatchProfile) -> str:
    mine = {"name": user.name, "interests": user.interests, "values": user.values}
    theirs = {"name": match.name, "interests": match.interests, "bio": match.bio}
    return (
        "Generate a personalized icebreaker message for starting a conversation.\n\n"
        f"Your profile: {json.dumps(mine, ensure_ascii=False)}\n"
        f"Their profile: {json.dumps(theirs, ensure_ascii=False)}\n\n"
        "Create a friendly, natural opening message (1-2 sentences) that references "
        "a shared interest or asks about something from their profile. Make it warm "
        "and genuine, not cheesy.\n\n"
        f"{_JSON_ONLY}\n{ICEBREAKER_SHAPE}"
    )


def bio_prompt(profile: UserProfile) -> str:
    return (
        f"Write a dating-profile bio for {profile.name} based on their questionnaire "
        "answers below.\n\n"
        f"Answers:\n{_dumps(_answers(profile))}\n\n"
        "Write in the first person, 2-4 sentences, warm and specific. Mention one or "
        "two concrete details from the answers. Do not invent facts.\n\n"
        f"{_JSON_ONLY}\n{BIO_SHAPE}"
    )


def consistency_prompt(profile: UserProfile) -> str:
    return (
        "You review dating profiles for authenticity. Check the questionnaire "
        "answers below for internal contradictions (e.g. 'introvert' but 'loves "
        "big parties every night', 'never drinks' but 'favourite weekend is wine "
        "tasting').\n\n"
        f"Profile of {profile.name}:\n{_dumps(_answers(profile))}\n\n"
        "Give a consistency score from 0 (contradictory) to 100 (fully coherent) "
        "and list each inconsistency you found as a short flag. Return an empty "
        "list when there are none.\n\n"
        f"{_JSON_ONLY}\n{CONSISTENCY_SHAPE}"
    )


def match_profiles_prompt(user: UserProfile, count: int) -> str:
    return (
        f"Create {count} realistic, diverse dating profiles of people who could be "
        "potential matches for the user below. Vary their compatibility: some "
        "should be strong matches and some weaker.\n\n"
        f"User Profile:\n{_dumps(user.to_prompt_dict())}\n\n"
        "Give every profile a unique id, an adult birth date and a short bio.\n\n"
        f"{_JSON_ONLY}\n{MATCHES_SHAPE}"
    )


def dating_tips_prompt(profile: UserProfile, count: int) -> str:
    return (
        f"Give {count} personalized dating tips for {profile.name}, based on the "
        "profile below. Cover several categories.\n\n"
        f"Profile:\n{_dumps(_answers(profile))}\n\n"
        f"{_JSON_ONLY}\n{TIPS_SHAPE}"
    )


def relationship_insight_prompt(profile: UserProfile) -> str:
    return (
        f"Describe the relationship style of {profile.name} based on the profile "
        "below: how they love, what they bring to a partnership and where they "
        "can grow. Be encouraging and concrete.\n\n"
        f"Profile:\n{_dumps(_answers(profile))}\n\n"
        f"{_JSON_ONLY}\n{INSIGHT_SHAPE}"
    )
