# synccircle/services/answer_kinds/choice_kind.py
from typing import Any, Dict, List, Optional
from .base_answer_kind import BaseAnswerKind


class MultipleChoiceAnswerKind(BaseAnswerKind):
    """Pick from the question's options.

    A single selection is stored as a string, several as a list of strings.
    """

    question_type = "multiple-choice"

    def validate_definition(self, question: Dict[str, Any]) -> List[str]:
        options = question.get('options')
        if not isinstance(options, list) or not options:
            return [f"Question '{question.get('title')}' needs at least one option"]
        if not all(isinstance(option, str) and option.strip() for option in options):
            return [f"Options of question '{question.get('title')}' must be non-empty strings"]
        if len(set(options)) != len(options):
            return [f"Options of question '{question.get('title')}' must be unique"]
        return []

    def validate(self, question: Dict[str, Any], value: Any) -> Optional[str]:
        options = question.get('options') or []
        selected = value if isinstance(value, list) else [value]
        if not all(isinstance(item, str) for item in selected):
            return f"Answer to '{question.get('title')}' must be one of the listed options"
        unknown = [item for item in selected if item and item not in options]
        if unknown:
            return f"'{unknown[0]}' is not an option of '{question.get('title')}'"
        return None

    def summarize(self, question: Dict[str, Any], values: List[Any]) -> Dict[str, Any]:
        summary = super().summarize(question, values)
        tallies = {option: 0 for option in question.get('options') or []}
        for value in values:
            for item in (value if isinstance(value, list) else [value]):
                if item in tallies:
                    tallies[item] += 1
        summary['optionCounts'] = tallies
        return summary
