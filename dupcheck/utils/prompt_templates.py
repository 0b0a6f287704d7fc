"""
Prompt templates for the similarity analysis request.
"""
from typing import Dict, List, Sequence
from dupcheck.models.question_models import Question, ExistingQuestion


class PromptTemplates:
    """Prompt templates for duplicate detection."""

    SIMILARITY_SYSTEM = """You are an expert question similarity analyzer. Your task is to determine if a new question is similar or duplicate to existing questions.

SIMILARITY CRITERIA:
1. Semantic similarity - Do questions test the same knowledge/skill?
2. Content overlap - Are the core concepts identical?
3. Answer requirements - Would correct answers be the same?
4. Context similarity - Are they in the same domain/difficulty?

SIMILARITY LEVELS:
- 0.9-1.0: Nearly identical (definitely duplicate)
- 0.8-0.89: Very similar (likely duplicate, needs review)
- 0.6-0.79: Somewhat similar (different but related)
- 0.4-0.59: Different focus (same topic, different angle)
- 0.0-0.39: Not similar (different topics/skills)

RESPONSE FORMAT:
Return ONLY a valid JSON object with this structure:
{
  "similarities": [
    {
      "questionId": "existing-question-id",
      "similarity": 0.85,
      "reason": "Both questions test knowledge of React hooks, specifically useState",
      "isDuplicate": true
    }
  ],
  "overallAssessment": {
    "maxSimilarity": 0.85,
    "isDuplicate": true,
    "confidence": 0.9,
    "recommendation": "review",
    "summary": "High similarity found with existing React hooks question"
  }
}

IMPORTANT:
- Only include similarities >= 0.6 in the results
- Be conservative with duplicate detection
- Consider domain-specific terminology
- Focus on what knowledge/skill is being tested"""

    @staticmethod
    def render_question(question: Question) -> str:
        """Render stem, lettered options with a correctness marker, and explanation."""
        content = f'"{question.stem}"'

        if question.options:
            content += "\nOptions:"
            for index, option in enumerate(question.options):
                marker = "✓" if option.is_correct else " "
                content += f"\n  {chr(65 + index)}. [{marker}] {option.text}"

        if question.has_explanation:
            content += f'\nExplanation: "{question.explanation.strip()}"'

        return content

    @staticmethod
    def get_similarity_prompt(new_question: Question, existing_questions: Sequence[ExistingQuestion]) -> str:
        """Generate the user prompt comparing a candidate with existing questions."""
        existing_content = "\n".join(
            f"{index}. [ID: {question.id}] {PromptTemplates.render_question(question)}"
            for index, question in enumerate(existing_questions, 1)
        )
        return f"""NEW QUESTION TO CHECK:
{PromptTemplates.render_question(new_question)}

EXISTING QUESTIONS TO COMPARE AGAINST:
{existing_content}

Analyze the new question against these existing questions. Consider:
1. Question content/stem similarity
2. Answer options similarity (if present)
3. Explanation similarity (if present)
4. Whether they test the same knowledge/skill even if worded differently

Determine overall similarities and provide detailed reasoning."""

    @staticmethod
    def get_similarity_messages(
        new_question: Question,
        existing_questions: Sequence[ExistingQuestion]
    ) -> List[Dict[str, str]]:
        """Build the system and user messages for a similarity analysis."""
        return [
            {"role": "system", "content": PromptTemplates.SIMILARITY_SYSTEM},
            {"role": "user", "content": PromptTemplates.get_similarity_prompt(new_question, existing_questions)}
        ]
