"""
Supportive replies and self-help resources keyed by risk tier.
The reply picker takes an injected random.Random so tests can seed it.
"""
import random
from typing import Optional

from mindcare.core.risk import RiskTier

REPLY_TEMPLATES = {
    RiskTier.CRISIS: [
        "I'm very concerned about what you're going through. Your safety is my top priority. I've scheduled an "
        "emergency appointment for you with a counsellor. Please also contact emergency services if you're in "
        "immediate danger: National Suicide Prevention Lifeline: 988. You are not alone, and help is available.",
        "This sounds like you're in crisis, and I want you to know that your life has value. I've arranged urgent "
        "support for you. Please reach out to crisis helpline: 988 or visit your nearest emergency room if you're "
        "in immediate danger. A counsellor appointment has been automatically scheduled.",
    ],
    RiskTier.HIGH: [
        "I can hear that you're struggling with something really difficult right now. These feelings are valid, "
        "and seeking help shows strength. I've found some resources that might help, and I'd strongly encourage "
        "you to book an appointment with one of our counsellors. Would you like me to help you with that?",
        "It sounds like you're going through a really tough time. Please know that you don't have to face this "
        "alone. I'd recommend speaking with a professional counsellor who can provide personalized support. Check "
        "out our resources section for immediate coping strategies.",
    ],
    RiskTier.MODERATE: [
        "Thank you for sharing that with me. It's completely normal to feel this way sometimes. Here are some "
        "coping strategies that might help: deep breathing exercises, grounding techniques, or talking to someone "
        "you trust. Our resources section has some helpful videos and guides.",
        "I understand you're dealing with some challenging feelings. Self-care is important during times like "
        "this. Consider activities like mindfulness, gentle exercise, or journaling. If these feelings persist, "
        "don't hesitate to reach out to a counsellor.",
    ],
    RiskTier.LOW: [
        "I hear you, and I'm glad you felt comfortable sharing. It's great that you're being proactive about your "
        "mental health. Our resources section has some helpful materials on maintaining wellness and building "
        "resilience.",
        "Thank you for reaching out. Taking care of your mental health is important. Feel free to explore our "
        "peer support forums to connect with others, or check out our resources for wellness tips.",
    ],
}

RESOURCES = {
    RiskTier.CRISIS: [
        {"title": "Crisis Support - National Suicide Prevention Lifeline", "url": "https://988lifeline.org", "type": "Emergency"},
        {"title": "Emergency Coping Strategies", "url": "https://www.youtube.com/watch?v=example2", "type": "Video"},
        {"title": "Immediate Safety Planning", "url": "https://www.example.com/safety-plan", "type": "Guide"},
    ],
    RiskTier.HIGH: [
        {"title": "Managing Severe Depression", "url": "https://www.youtube.com/watch?v=example3", "type": "Video"},
        {"title": "Anxiety Coping Techniques", "url": "https://www.youtube.com/watch?v=example4", "type": "Video"},
        {"title": "When to Seek Professional Help", "url": "https://www.example.com/seek-help", "type": "Article"},
    ],
    RiskTier.MODERATE: [
        {"title": "Mindfulness for Mental Health", "url": "https://www.youtube.com/watch?v=example5", "type": "Video"},
        {"title": "Stress Management Techniques", "url": "https://www.youtube.com/watch?v=example6", "type": "Video"},
        {"title": "Building Resilience", "url": "https://www.example.com/resilience", "type": "Guide"},
    ],
    RiskTier.LOW: [
        {"title": "Daily Wellness Practices", "url": "https://www.youtube.com/watch?v=example7", "type": "Video"},
        {"title": "Maintaining Mental Health", "url": "https://www.youtube.com/watch?v=example8", "type": "Video"},
        {"title": "Self-Care Strategies", "url": "https://www.example.com/self-care", "type": "Article"},
    ],
}


class ReplySelector:
    """Pick one canned reply for a tier."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def pick(self, tier: RiskTier) -> str:
        return self._rng.choice(REPLY_TEMPLATES[tier])


def resources_for(tier: RiskTier) -> list[dict]:
    return [dict(r) for r in RESOURCES[tier]]
