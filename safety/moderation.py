# safety/moderation.py

"""
Author:
Keyword-based moderation for triage text and support chat
messages. 'moderate_content' returns the list of flags found;
an empty list means the content is clean. Profanity is only
flagged for minor-safe conversations.
"""

SELF_HARM_KEYWORDS = (
    'self-harm',
    'self harm',
    'cut myself',
    'cutting myself',
    'hurt myself',
    'hurting myself',
    'kill myself',
    'killing myself',
    'suicide',
    'suicidal',
    'end my life',
    'want to die',
    'better off dead',
    'no reason to live',
)

VIOLENCE_KEYWORDS = (
    'want to hurt',
    'going to hurt',
    'kill someone',
    'attack someone',
    'bring a weapon',
    'shoot up',
)

SUBSTANCE_KEYWORDS = (
    'getting high',
    'doing drugs',
    'buy drugs',
    'sell drugs',
    'overdose',
    'getting drunk',
)

PROFANITY_KEYWORDS = (
    'fuck',
    'shit',
    'bitch',
    'bastard',
    'damn',
    'crap',
)

SELF_HARM = 'self-harm'
VIOLENCE = 'violence'
SUBSTANCE = 'substance'
PROFANITY = 'profanity'


def _contains_any(text, keywords):
    return any(keyword in text for keyword in keywords)


def moderate_content(content, minor_safe=False):
    text = (content or '').lower()
    flags = []
    if _contains_any(text, SELF_HARM_KEYWORDS):
        flags.append(SELF_HARM)
    if _contains_any(text, VIOLENCE_KEYWORDS):
        flags.append(VIOLENCE)
    if _contains_any(text, SUBSTANCE_KEYWORDS):
        flags.append(SUBSTANCE)
    if minor_safe and _contains_any(text, PROFANITY_KEYWORDS):
        flags.append(PROFANITY)
    return flags


def detect_risk(content):
    return SELF_HARM in moderate_content(content)
