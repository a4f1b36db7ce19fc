"""
Third-party AI/translation collaborators with local fallbacks.

Each one is constructed at startup from the environment. When a key is
missing (or the remote call fails) they answer from a deterministic or
fixed fallback instead of failing the request.
"""
from __future__ import annotations

import logging
import os
import random
from datetime import datetime, timezone
from typing import Dict, List, Optional

import httpx
from openai import OpenAI, OpenAIError

log = logging.getLogger("integrations")

QUESTIONNAIRE_FIELDS = (
    "sleepHours",
    "exerciseFrequency",
    "stressLevel",
    "socialConnection",
    "dietQuality",
    "screenTime",
)

SIGN_LANGUAGE_RESULTS: List[Dict] = [
    {"gesture": "Hello", "emoji": "👋", "confidence": 0.92},
    {"gesture": "Thank you", "emoji": "🙏", "confidence": 0.88},
    {"gesture": "I love you", "emoji": "❤️", "confidence": 0.95},
    {"gesture": "Peace", "emoji": "✌️", "confidence": 0.90},
    {"gesture": "OK", "emoji": "👌", "confidence": 0.87},
    {"gesture": "Thumbs up", "emoji": "👍", "confidence": 0.91},
]

FALLBACK_EMOTIONS: List[Dict] = [
    {"emotion": "Happy", "confidence": 0.89},
    {"emotion": "Neutral", "confidence": 0.78},
    {"emotion": "Calm", "confidence": 0.82},
    {"emotion": "Focused", "confidence": 0.76},
    {"emotion": "Relaxed", "confidence": 0.81},
]

FALLBACK_TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "hello, how are you today?": {"kn": "ಹಲೋ, ನೀವು ಇಂದು ಹೇಗಿದ್ದೀರಿ?", "hi": "नमस्ते, आप आज कैसे हैं?"},
    "thank you": {"kn": "ಧನ್ಯವಾದಗಳು", "hi": "धन्यवाद"},
    "goodbye": {"kn": "ವಿದಾಯ", "hi": "अलविदा"},
    "yes": {"kn": "ಹೌದು", "hi": "हाँ"},
    "no": {"kn": "ಇಲ್ಲ", "hi": "नहीं"},
}

_WELLNESS_SYSTEM_PROMPT = (
    "You are an empathetic wellness coach who provides personalized, evidence-based health and "
    "lifestyle recommendations. Your advice is practical, compassionate, and focuses on sustainable improvements."
)


def fallback_recommendations(responses: Dict) -> str:
    r = {name: responses.get(name, "not provided") for name in QUESTIONNAIRE_FIELDS}
    return f"""Based on your lifestyle data, here are personalized wellness recommendations:

**Sleep Optimization:**
Your current sleep pattern indicates {r['sleepHours']} hours per night. Aim for 7-9 hours of quality sleep by maintaining a consistent bedtime routine, keeping your bedroom cool and dark, and avoiding screens 1 hour before bed.

**Exercise and Movement:**
With your current activity level ({r['exerciseFrequency']}), consider incorporating at least 150 minutes of moderate aerobic activity or 75 minutes of vigorous activity per week.

**Stress Management:**
Your stress level of {r['stressLevel']}/10 suggests you could benefit from daily stress-reduction techniques such as deep breathing, 10-15 minutes of meditation, or journaling.

**Social Connection:**
{r['socialConnection']} is important for mental health. Make time for meaningful conversations with friends and family, and consider joining community groups aligned with your interests.

**Nutrition:**
Your diet quality ({r['dietQuality']}) can be enhanced by focusing on whole foods, staying hydrated, and limiting processed foods and added sugars.

**Digital Wellness:**
With {r['screenTime']} hours of screen time per day, consider disconnecting 1-2 hours before bed and following the 20-20-20 rule to reduce eye strain.

Remember, sustainable wellness comes from small, consistent changes. Start with one or two recommendations and build from there."""


def _wellness_prompt(responses: Dict) -> str:
    return (
        "As a wellness expert, analyze the following lifestyle data and provide personalized, actionable "
        "recommendations to improve overall wellbeing. Be empathetic, specific, and practical.\n\n"
        "Lifestyle Data:\n"
        f"- Sleep: {responses.get('sleepHours')} hours per night\n"
        f"- Exercise Frequency: {responses.get('exerciseFrequency')}\n"
        f"- Stress Level: {responses.get('stressLevel')}/10\n"
        f"- Social Connection: {responses.get('socialConnection')}\n"
        f"- Diet Quality: {responses.get('dietQuality')}\n"
        f"- Screen Time: {responses.get('screenTime')} hours per day\n\n"
        "Cover sleep, exercise, stress management, social connection, nutrition and digital wellness "
        "in clear, readable paragraphs. Keep the tone warm, encouraging, and supportive."
    )


class WellnessAdvisor:
    def __init__(self, client: Optional[OpenAI] = None, model: str = "gpt-4o-mini"):
        self._client = client
        self._model = model

    @classmethod
    def from_env(cls) -> "WellnessAdvisor":
        api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
        model = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
        if not api_key:
            log.warning("OPENAI_API_KEY not set; wellness recommendations will use the fallback text")
            return cls(None, model)
        return cls(OpenAI(api_key=api_key, timeout=30.0), model)

    def is_available(self) -> bool:
        return self._client is not None

    def generate(self, responses: Dict) -> str:
        if not self._client:
            return fallback_recommendations(responses)
        try:
            completion = self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": _WELLNESS_SYSTEM_PROMPT},
                    {"role": "user", "content": _wellness_prompt(responses)},
                ],
                max_tokens=2048,
            )
        except OpenAIError as exc:
            log.warning("OpenAI request failed, using fallback recommendations: %s", exc)
            return fallback_recommendations(responses)
        content = completion.choices[0].message.content if completion.choices else None
        return content or fallback_recommendations(responses)


class ExpressionAnalyzer:
    """Facial-expression stand-in: picks from a fixed set of plausible results."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def analyze(self, video_ref: str) -> Dict:
        result = dict(self._rng.choice(FALLBACK_EMOTIONS))
        result["timestamp"] = datetime.now(timezone.utc).isoformat()
        return result


def fallback_translation(text: str, lang: str) -> str:
    return FALLBACK_TRANSLATIONS.get(text.lower().strip(), {}).get(lang, text)


class Translator:
    def __init__(self, api_key: Optional[str] = None, url: str = "https://libretranslate.com/translate"):
        self._api_key = api_key
        self._url = url

    @classmethod
    def from_env(cls) -> "Translator":
        api_key = (os.getenv("LIBRETRANSLATE_API_KEY") or "").strip() or None
        if not api_key:
            log.warning("LIBRETRANSLATE_API_KEY not set; using fallback translations")
        return cls(api_key, os.getenv("LIBRETRANSLATE_URL", "https://libretranslate.com/translate"))

    def _fallback(self, text: str) -> Dict[str, str]:
        return {
            "english": text,
            "kannada": fallback_translation(text, "kn"),
            "hindi": fallback_translation(text, "hi"),
        }

    def translate(self, text: str) -> Dict[str, str]:
        if not self._api_key:
            return self._fallback(text)

        results = {}
        try:
            with httpx.Client(timeout=10.0) as client:
                for lang in ("kn", "hi"):
                    r = client.post(
                        self._url,
                        json={"q": text, "source": "en", "target": lang, "format": "text", "api_key": self._api_key},
                    )
                    data = r.json()
                    if r.status_code >= 400 or data.get("error"):
                        log.warning("LibreTranslate error: %s", data.get("error") or r.status_code)
                        return self._fallback(text)
                    results[lang] = data.get("translatedText") or text
        except (httpx.HTTPError, ValueError) as exc:
            log.warning("Translation request failed: %s", exc)
            return self._fallback(text)

        return {"english": text, "kannada": results["kn"], "hindi": results["hi"]}


__all__ = [
    "QUESTIONNAIRE_FIELDS",
    "SIGN_LANGUAGE_RESULTS",
    "FALLBACK_EMOTIONS",
    "fallback_recommendations",
    "fallback_translation",
    "WellnessAdvisor",
    "ExpressionAnalyzer",
    "Translator",
]
