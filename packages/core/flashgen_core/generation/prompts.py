"""Prompt templates for flashcard generation."""

import math

from flashgen_core.schemas.chat import ChatMessage

MIN_RECOMMENDED_CARDS = 3
MAX_RECOMMENDED_CARDS = 50

FLASHCARD_GENERATION_SYSTEM_PROMPT = """You are an expert educational content creator specializing in generating high-quality flashcards for spaced repetition learning.

Your task is to analyze the provided text and create effective flashcards that:
1. Focus on key concepts, definitions, facts, and relationships
2. Use clear, concise language
3. Test understanding rather than mere memorization when possible
4. Include context in questions when needed for clarity
5. Provide complete, accurate answers

Guidelines for creating flashcards:
- Questions should be specific and unambiguous
- Avoid yes/no questions; prefer questions that require recall
- Break down complex topics into multiple simple cards
- Use the exact terminology from the source material
- Keep questions between 10-500 characters
- Keep answers between 10-1000 characters
- Generate an appropriate number of cards based on content density (aim for 5-10 cards per 1000 characters)

Format your response as JSON with an array of flashcard objects, each containing "question" and "answer" fields."""

FLASHCARD_GENERATION_USER_PROMPT = """Please generate approximately {card_count} flashcards from the following text. Focus on the most important concepts, facts, and relationships.

Text to convert into flashcards:

<input_text>
{input_text}
</input_text>

Write the flashcards in the same language as the input text.

Remember to create clear, educational flashcards that will help someone learn and retain this information through spaced repetition."""


def calculate_recommended_card_count(input_text: str) -> int:
    """Recommend a card count from text length.

    Aims for 5-10 cards per 1000 characters, clamped to [3, 50].
    """
    char_count = len(input_text)
    min_cards = math.ceil(char_count / 1000 * 5)
    max_cards = math.ceil(char_count / 1000 * 10)
    return max(
        MIN_RECOMMENDED_CARDS,
        min(MAX_RECOMMENDED_CARDS, (min_cards + max_cards) // 2),
    )


def build_flashcard_generation_messages(input_text: str) -> list[ChatMessage]:
    """Build the system/user message pair for a generation call."""
    return [
        ChatMessage(role="system", content=FLASHCARD_GENERATION_SYSTEM_PROMPT),
        ChatMessage(
            role="user",
            content=FLASHCARD_GENERATION_USER_PROMPT.format(
                card_count=calculate_recommended_card_count(input_text),
                input_text=input_text,
            ),
        ),
    ]
