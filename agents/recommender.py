"""Video Recommender - Sugestoes de videos de revisao via busca do Gemini.

Usa o cliente de geracao com a ferramenta de busca habilitada para
encontrar videos do YouTube sobre o topico do documento ativo.
"""

import logging
import re

from pydantic import BaseModel, Field

from llm import GOOGLE_SEARCH_TOOL, ContentPart, StructuredGenerationClient

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = "General Revision"
TOPIC_SCAN_CHARS = 100

_CHAPTER_PREFIX = re.compile(r"^\s*chapter\s+\d+\s*:\s*", re.IGNORECASE)

RECOMMENDATION_PROMPT = (
    "Find {count} highly rated educational YouTube videos explaining '{topic}'. "
    "Provide the video title and the full YouTube URL. Respond ONLY with a JSON object "
    "with a key 'videos' holding an array of objects with keys 'title' and 'url'."
)


class VideoRecommendation(BaseModel):
    """Video sugerido."""

    title: str = Field(..., description="Titulo do video")
    url: str = Field(..., description="URL completa do YouTube")


class VideoList(BaseModel):
    videos: list[VideoRecommendation] = Field(default=[])


def extract_topic(document_text: str) -> str:
    """Deriva o topico da primeira linha do documento.

    Example:
        >>> extract_topic("Chapter 1: Physical World\\n\\n1.1 What is Physics?")
        'Physical World'
    """
    head = (document_text or "")[:TOPIC_SCAN_CHARS].lstrip()
    first_line = head.split("\n", 1)[0]
    topic = _CHAPTER_PREFIX.sub("", first_line).strip()
    return topic or DEFAULT_TOPIC


class VideoRecommender:
    """Recomenda videos para o documento ativo.

    Qualquer falha resulta em lista vazia; recomendacoes sao opcionais.
    """

    VIDEO_COUNT = 3

    def __init__(self, client: StructuredGenerationClient):
        self.client = client

    async def recommend(self, document_text: str) -> list[VideoRecommendation]:
        topic = extract_topic(document_text)
        prompt = RECOMMENDATION_PROMPT.format(count=self.VIDEO_COUNT, topic=topic)

        result = await self.client.request(
            [ContentPart(role="user", text=prompt)],
            output_schema=VideoList,
            tools=[GOOGLE_SEARCH_TOOL],
        )

        if not result.ok:
            logger.warning(f"Recomendacoes indisponiveis para '{topic}': {result.failure.message}")
            return []

        videos = [video for video in result.value.videos if "youtu" in video.url]
        logger.info(f"{len(videos)} video(s) recomendados para '{topic}'")
        return videos
