import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

# Load environment variables (only in development)
# In containers, environment variables are set directly
if os.getenv("ENVIRONMENT") != "production":
    load_dotenv()

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

DEFAULT_BASE_DIR = "docs"
DEFAULT_BRANCH = "main"
GITHUB_API_BASE = "https://api.github.com"
DEFAULT_USER_AGENT = "docstore-middleware"

# CORS
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

# Rate Limiting
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
RATE_LIMIT_PER_MINUTE = int(os.getenv("RATE_LIMIT_PER_MINUTE", "120"))


@dataclass(frozen=True)
class DocstoreSettings:
    """
    Process-wide configuration for the document store.

    Built once at startup and handed to every component that needs it.
    Nothing below the router reads the environment directly.
    """
    github_token: str = ""
    github_owner: str = ""
    github_repo: str = ""
    github_branch: str = DEFAULT_BRANCH
    github_api_base: str = GITHUB_API_BASE
    github_timeout: float = 30.0
    docs_base_dir: str = DEFAULT_BASE_DIR
    api_token: str = ""
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "DocstoreSettings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Frozen DocstoreSettings instance
        """
        env = os.environ if environ is None else environ
        return cls(
            github_token=env.get("GITHUB_TOKEN", ""),
            github_owner=env.get("GITHUB_OWNER", ""),
            github_repo=env.get("GITHUB_REPO", ""),
            github_branch=env.get("GITHUB_BRANCH") or DEFAULT_BRANCH,
            github_api_base=(env.get("GITHUB_API_BASE") or GITHUB_API_BASE).rstrip("/"),
            github_timeout=float(env.get("GITHUB_TIMEOUT") or 30.0),
            docs_base_dir=env.get("DOCS_BASE_DIR") or DEFAULT_BASE_DIR,
            api_token=env.get("DOCSTORE_API_TOKEN", ""),
            user_agent=env.get("DOCSTORE_USER_AGENT") or DEFAULT_USER_AGENT,
        )

    def missing_github_settings(self) -> list:
        """Names of GitHub settings that are required but empty."""
        required = {
            "GITHUB_TOKEN": self.github_token,
            "GITHUB_OWNER": self.github_owner,
            "GITHUB_REPO": self.github_repo,
        }
        return [name for name, value in required.items() if not value]
