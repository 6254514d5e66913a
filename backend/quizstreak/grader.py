from __future__ import annotations
import json
import logging
import re
from typing import Optional, Union

from pydantic import ValidationError

from .errors import ConfigurationError, OracleError
from .gemini_client import GeminiClient
from .schemas import Verdict
from .settings import settings

logger = logging.getLogger(__name__)

FALLBACK_FEEDBACK = "Could not validate the answer automatically."
FALLBACK_VERDICT = Verdict(rating="partial", feedback=FALLBACK_FEEDBACK)

_FENCE_OPEN = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\n?```$")


def build_grading_prompt(question_text: str, user_answer: str) -> str:
	return (
		"You are a Web Programming I teacher grading a student's answer.\n"
		"The course is introductory, for beginners who have never built a web page before, "
		"so a correct answer does not need to be long or highly detailed.\n\n"
		f"Question: {question_text}\n"
		f"Student answer: {user_answer}\n\n"
		"Classify the answer into exactly one of these categories:\n"
		"- \"correct\": the answer explains the concept correctly and completely for the level of the course\n"
		"- \"partial\": the answer explains the concept only in part or gives no clear examples\n"
		"- \"incorrect\": the answer is wrong\n\n"
		"Reply ONLY with a single JSON object in this format (no markdown, no code fences):\n"
		"{\n"
		"  \"rating\": \"correct\" | \"partial\" | \"incorrect\",\n"
		"  \"feedback\": \"Short explanation (at most 400 characters) of why the answer is correct/partial/incorrect\"\n"
		"}"
	)


def strip_code_fence(text: str) -> str:
	"""Remove a markdown fence (```json ... ``` or ``` ... ```) wrapped around the reply."""
	cleaned = text.strip()
	cleaned = _FENCE_OPEN.sub("", cleaned, count=1)
	cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
	return cleaned.strip()


def parse_verdict(text: str) -> Verdict:
	cleaned = strip_code_fence(text)
	try:
		data = json.loads(cleaned)
	except ValueError as exc:
		raise OracleError(f"reply is not JSON: {exc}") from exc
	if not isinstance(data, dict):
		raise OracleError("reply is not a JSON object")
	rating = data.get("rating")
	if isinstance(rating, str):
		data = {**data, "rating": rating.strip().lower()}
	try:
		return Verdict.model_validate(data)
	except ValidationError as exc:
		raise OracleError(f"reply has the wrong shape: {exc.error_count()} error(s)") from exc


class AnswerGrader:
	"""Grades a free-text answer through Gemini.

	``evaluate`` never fails because of the model: any failed attempt degrades
	to ``FALLBACK_VERDICT`` so the student's daily submission still goes
	through and can be appealed. The only error it raises is
	``ConfigurationError`` when no client was configured at all.
	"""

	def __init__(self, client: Optional[GeminiClient], *, model: Optional[str] = None) -> None:
		self.client = client
		self.model = model or settings.gemini_model

	async def evaluate(self, question_text: str, user_answer: str) -> Verdict:
		if self.client is None:
			raise ConfigurationError("Gemini API not configured")
		outcome = await self._attempt(build_grading_prompt(question_text, user_answer))
		if isinstance(outcome, OracleError):
			logger.warning("Automatic grading failed, using fallback verdict: %s", outcome)
			return FALLBACK_VERDICT
		return outcome

	async def _attempt(self, prompt: str) -> Union[Verdict, OracleError]:
		try:
			text = await self.client.generate_content(model=self.model, contents=prompt)
		except Exception as exc:
			return OracleError(f"oracle call failed: {exc!r}")
		if not text:
			return OracleError("no response text from oracle")
		try:
			return parse_verdict(text)
		except OracleError as exc:
			return exc

	async def aclose(self) -> None:
		if self.client is not None:
			await self.client.aclose()


def build_grader() -> AnswerGrader:
	if not settings.gemini_api_key:
		logger.error("GEMINI_API_KEY not set. Answer validation will fail.")
		return AnswerGrader(None)
	return AnswerGrader(GeminiClient())
