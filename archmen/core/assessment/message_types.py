"""
Kinds of messages in an assessment session's chat log.

QUESTION: Interviewer asks the next assessment question
ANSWER: User's reply to a question
SYSTEM: Status notes such as results being ready
FOLLOW_UP: Free-form question after the assessment
"""

import enum


class ChatMessageType(str, enum.Enum):
    QUESTION = "question"
    ANSWER = "answer"
    SYSTEM = "system"
    FOLLOW_UP = "follow_up"
