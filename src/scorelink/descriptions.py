"""
Optional category description lookup.

Category labels are free text. Descriptions are looked up by exact (trimmed)
label; a missing entry simply has no description.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

GRAMMAR_DESCRIPTIONS = {
    "명사/대명사": "문장의 주인이 되는 대상을 지칭하고 이를 대신하는 표현의 쓰임을 이해했는지 물어봅니다.",
    "동사": "주어의 동작이나 상태를 나타내어 문장을 완성하는 기본 원리를 이해를 확인합니다.",
    "형용사/부사": "대상의 상태나 동작을 구체적으로 묘사하여 의미를 풍부하게 하는 법을 이해했는지 물어봅니다.",
    "관사": "명사 앞에서 특정 여부를 결정짓는 a, an, the의 정확한 사용법을 이해를 확인합니다.",
    "의문사": "육하원칙에 따라 정보를 묻고 답하는 의문문의 구조를 이해했는지 물어봅니다.",
    "조동사": "동사에 능력, 허가, 의무 등의 세밀한 의미를 더하는 조동사의 역할을 이해를 확인합니다.",
    "시제": "사건이 일어난 시점을 과거, 현재, 미래로 정확히 표현하는 법을 이해했는지 물어봅니다.",
    "문장 형식": "동사의 성격에 따라 결정되는 5가지 문장 구성 원리를 이해를 확인합니다.",
    "문장 형태": "긍정, 부정, 의문 등 상황에 따라 문장의 형태를 바꾸는 법을 이해했는지 물어봅니다.",
    "접속사": "접속사를 활용해 원인, 양보, 조건을 표현하며 글의 전개 흐름을 매끄럽게 구성하는 능력을 이해했는지 물어봅니다.",
    "비교급": "대상 간의 정도 차이를 비교하거나 최상의 상태를 표현하는 방식을 이해했는지 물어봅니다.",
    "동명사/to 부정사": "동명사와 to 부정사의 쓰임을 이해하고, 특정 동사에서 형태에 따라 의미가 달라지는 것을 파악하고 있는지 물어봅니다.",
    "관계사": "선행사의 성격에 따라 알맞은 관계사를 선택하고, 복잡한 문장을 세련되게 결합하는 능력을 갖추었는지 확인합니다.",
    "분사/분사구문": "동사를 형용사처럼 활용하여 명사를 수식하는 현재분사와 과거분사의 의미 차이를 명확히 이해했는지 물어봅니다. 또한, 접속사가 포함된 긴 문장을 분사구문으로 축약하여 글의 효율성을 높이는 고급 문장 구성 원리를 이해를 확인합니다.",
    "가정법": "조건절, 가정법 과거, 가정법 과거완료의 차이를 명확히 구분하여 문장을 완성할 수 있는지 이해를 확인합니다. 또한 화자의 심리적 거리감을 표현하는 특수한 시제 규칙을 영작에 올바르게 적용하는지를 이해했는지 물어봅니다.",
    "특수구문": "강조, 도치, 세밀한 의미를 부각하는 기법을 이해했는지 물어봅니다.",
}

READING_DESCRIPTIONS = {
    "Author's Purpose": "글쓴이의 의도 문제. 글쓴이가 글을 통해 어떤 목적을 달성하려고 하는지 파악할 수 있는 능력을 물어봅니다.",
    "Detail": "세부사항 문제. 주요 세부 사항과 주제를 뒷받침하는 주요 정보를 이해하고, 지문의 내용과 다른 정보를 찾을 수 있는지를 물어봅니다.",
    "Inference": "추론 문제. 읽은 내용을 토대로 직접적으로 언급되지 않는 사항을 추론할 수 있는 능력을 물어봅니다.",
    "Main Idea": "주제 문제. 글이 전체적으로 무엇에 관한 것인지를 파악할 수 있는 능력을 물어봅니다.",
    "Vocabulary": "어휘 문제. 지문 속 어휘나 표현의 의미를 정확하게 파악할 수 있는지를 물어봅니다.",
    "Pronoun Referent": "지시어 문제. 지시어가 무엇을 의미하는지를 정확하게 파악할 수 있는지를 물어봅니다.",
    "Rhetorical Structure": "수사적 의도 문제. 특정 정보가 어떤 의도로 제시되었는지 파악할 수 있는지를 물어봅니다.",
    "Sentence Insertion": "문장 삽입 문제. 글의 흐름을 잘 이해하고 있는지를 물어봅니다.",
}

LISTENING_DESCRIPTIONS = {
    "Main Idea": "주제 문제. 들려주는 내용이 무엇에 관한 것인지를 파악할 수 있는지를 물어봅니다.",
    "Detail": "세부사항 문제. 주제를 뒷받침하는 중요한 세부 사항을 정확히 파악할 수 있는지를 물어봅니다.",
    "Inference": "추론 문제. 들은 내용을 토대로 직접적으로 언급되지 않은 사항을 추론할 수 있는 능력을 물어봅니다.",
    "Prosody": "화자의 어조 문제. 화자가 특정 내용을 말할 때 태도에 따라 언급되지 않은 사항을 파악할 수 있는 능력을 물어봅니다.",
    "Prediction": "예측 문제. 언급된 정보를 근거로 화자가 앞으로 할 일을 예측할 수 있는지를 물어봅니다.",
    "Speaker's Purpose": "화자의 의도 문제. 화자가 어떤 목적을 달성하려 하는지 왜 해당 내용을 말하는지를 정확하게 파악할 수 있는지를 물어봅니다.",
    "Rhetorical Device": "수사적 구조 문제. 화자가 특정 정보를 언급한 의도를 정확히 파악할 수 있는지를 물어봅니다.",
}

@dataclass(frozen=True)
class CategoryDescriptions:
    """Description tables for reading, listening and grammar categories

    Args:
        reading (Dict[str, str]): Used when the section name mentions "reading".
        listening (Dict[str, str]): Used when the section name mentions "listening".
        grammar (Dict[str, str]): Fallback table for every section.
    """
    reading: Dict[str, str] = field(default_factory=lambda: dict(READING_DESCRIPTIONS))
    listening: Dict[str, str] = field(default_factory=lambda: dict(LISTENING_DESCRIPTIONS))
    grammar: Dict[str, str] = field(default_factory=lambda: dict(GRAMMAR_DESCRIPTIONS))

    def describe(self, category: str, section_name: str = "") -> Optional[str]:
        """Look up the description of a category

        Args:
            category (str): Category label. Surrounding whitespace is ignored.
            section_name (str, optional): Display name of the owning section.

        Returns:
            Optional[str]: The description, or None if there is none.
        """
        label = (category or "").strip()
        section = (section_name or "").lower()

        description = None
        if "reading" in section:
            description = self.reading.get(label)
        elif "listening" in section:
            description = self.listening.get(label)

        if not description:
            description = self.grammar.get(label)

        return description or None
