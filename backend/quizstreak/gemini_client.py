from __future__ import annotations
import httpx
from typing import Any, Dict, Optional
from .errors import ConfigurationError
from .settings import settings

class GeminiClient:
	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		base_url: Optional[str] = None,
		model: Optional[str] = None,
		http_client: Optional[httpx.AsyncClient] = None,
	) -> None:
		self.api_key = api_key or settings.gemini_api_key
		if not self.api_key:
			raise ConfigurationError("GEMINI_API_KEY is not configured")
		self.model = model or settings.gemini_model
		self.provider = settings.gemini_provider
		self._base_url = base_url
		self._auth_in_query = self.provider != "vertex"
		self._client = http_client or httpx.AsyncClient(timeout=30)

	def endpoint_for(self, model: str) -> str:
		if self._base_url:
			return f"{self._base_url.rstrip('/')}/{model}:generateContent"
		if self.provider == "vertex":
			region = settings.vertex_region
			project = settings.vertex_project or "placeholder-project"
			# Vertex AI Generative REST endpoint (API key via header)
			return (
				f"https://{region}-aiplatform.googleapis.com/v1/projects/{project}/locations/{region}/publishers/google/models/{model}:generateContent"
			)
		# Google AI Studio (Generative Language API)
		return f"https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

	async def generate_content(self, *, contents: str, model: Optional[str] = None) -> Optional[str]:
		"""Single generateContent call; returns the response text or None when it carries none.

		Network errors and non-2xx responses propagate as httpx exceptions.
		"""
		payload: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": contents}]}]}
		params: Dict[str, Any] = {}
		headers: Dict[str, str] = {}
		if self._auth_in_query:
			params["key"] = self.api_key
		else:
			headers["x-goog-api-key"] = self.api_key
		r = await self._client.post(self.endpoint_for(model or self.model), params=params, headers=headers, json=payload)
		r.raise_for_status()
		try:
			data = r.json()
		except ValueError:
			raise RuntimeError(f"Unexpected Gemini response: {r.text}") from None
		return _extract_text(data)

	async def aclose(self) -> None:
		await self._client.aclose()


def _extract_text(data: Any) -> Optional[str]:
	try:
		parts = data["candidates"][0]["content"]["parts"]
	except (KeyError, IndexError, TypeError):
		return None
	text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
	return text or None
