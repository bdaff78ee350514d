"""
Module for generating summaries and study notes from transcripts using LLM models.
"""

from typing import Optional

from langchain_core.documents import Document
from langchain_core.prompts import ChatPromptTemplate
from langchain_text_splitters import RecursiveCharacterTextSplitter
from langchain.chat_models import init_chat_model

from transcript_service.config import config
from transcript_service.core.prompts import (
    summary_template,
    partial_summary_template,
    combine_summary_template,
    notes_template,
)
from transcript_service.models.schemas import SummaryConfig
from transcript_service.utils.error_handling import SummaryFailed
from transcript_service.utils.logger import logging

NO_SPEECH_DETECTED = "No speech detected."


class TranscriptSummarizer:
    """Class to handle summary and notes generation."""

    def __init__(self, summary_config: Optional[SummaryConfig] = None, api_key: Optional[str] = None):
        """
        Initialize the summarizer.

        Args:
            summary_config: Model and chunking options
            api_key: Groq API key (if None, resolved from the environment at first use)
        """
        self.summary_config = summary_config or SummaryConfig()
        self.api_key = api_key

    def _chat_model(self, max_tokens: int):
        if not self.api_key:
            self.api_key = config.require_llm_api_key()

        return init_chat_model(
            model=self.summary_config.model,
            model_provider="groq",
            temperature=self.summary_config.temperature,
            max_tokens=max_tokens,
            api_key=self.api_key,
            timeout=self.summary_config.timeout,
        )

    @staticmethod
    def _invoke(llm, template: str, **values) -> str:
        prompt = ChatPromptTemplate.from_messages([("system", template)])
        response = llm.invoke(prompt.format_messages(**values))
        content = getattr(response, "content", response)
        if not isinstance(content, str) or not content.strip():
            raise SummaryFailed("LLM returned an empty response")
        return content.strip()

    def summarize(self, transcript_text: str) -> str:
        """
        Summarize a transcript text.

        Args:
            transcript_text: Full transcript text to summarize

        Returns:
            Summarized text, or a neutral message when there is no speech
        """
        if not transcript_text or not transcript_text.strip():
            return NO_SPEECH_DETECTED

        llm = self._chat_model(self.summary_config.max_tokens)

        text_splitter = RecursiveCharacterTextSplitter(
            chunk_size=self.summary_config.chunk_size,
            chunk_overlap=self.summary_config.chunk_overlap
        )
        docs = text_splitter.split_documents([Document(page_content=transcript_text)])

        # For shorter transcripts: use the "stuff" method
        if len(docs) <= 1:
            logging.info("Generating summary in a single pass")
            return self._invoke(llm, summary_template, text=transcript_text)

        # For longer transcripts: use map-reduce
        logging.info(f"Generating summary over {len(docs)} chunks")
        interim_summaries = [
            self._invoke(llm, partial_summary_template, text=doc.page_content)
            for doc in docs
        ]
        return self._invoke(llm, combine_summary_template, summaries="\n\n".join(interim_summaries))

    def generate_notes(self, transcript_text: str) -> str:
        """
        Generate structured Markdown study notes for a transcript.

        Args:
            transcript_text: Full transcript text

        Returns:
            Markdown notes, or a neutral message when there is no speech
        """
        if not transcript_text or not transcript_text.strip():
            return NO_SPEECH_DETECTED

        llm = self._chat_model(self.summary_config.notes_max_tokens)
        logging.info("Generating study notes")
        return self._invoke(llm, notes_template, text=transcript_text)
