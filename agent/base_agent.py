"""
모든 Agent의 베이스 클래스.
process() 인터페이스를 정의합니다.
"""
from abc import ABC, abstractmethod


class BaseAgent(ABC):
    """
    모든 Micro Agent의 추상 베이스 클래스.

    모든 Agent는 다음을 준수해야 합니다:
    1. BaseAgent를 상속받을 것
    2. process() 메서드를 구현할 것
    3. 단일 책임: 입력 -> 결과 변환 하나만 담당할 것

    사용 예시:
        >>> class MyAgent(BaseAgent):
        ...     async def process(self, text: str) -> str:
        ...         return text.strip()
        ...
        >>> agent = MyAgent()
        >>> result = await agent.process("  가계 대출  ")
    """

    @abstractmethod
    async def process(self, *args, **kwargs):
        """
        각 Agent가 반드시 구현해야 하는 핵심 처리 메서드.

        Agent 기능의 메인 인터페이스입니다.
        각 Agent는 자신만의 입력/출력 시그니처를 정의합니다.

        Args:
            *args: Agent별 위치 인자
            **kwargs: Agent별 키워드 인자

        Returns:
            Agent별 결과 (구현에 따라 다름)

        참고:
            서브클래스는 반드시 이 메서드를 구현해야 하며,
            적절한 타입 힌트와 입출력을 설명하는 docstring을 포함해야 합니다.
        """
        pass
