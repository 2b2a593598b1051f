"""
Configuration for the Foundry demo, read from the environment (and an optional `.env` file).
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

PROJECT_ENDPOINT_VAR = "AZURE_FOUNDRY_PROJECT_ENDPOINT"
MODEL_DEPLOYMENT_VAR = "AZURE_FOUNDRY_GPT_MODEL"
AGENT_NAME_VAR = "FOUNDRY_AGENT_NAME"
DATA_FILE_VAR = "SALES_DATA_FILE"

DEFAULT_AGENT_NAME = "DataAnalystAgent"
DEFAULT_DATA_FILE = "./sales_data.csv"


class ConfigurationError(Exception):
    """Raised when required environment variables are missing."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required environment variables: {', '.join(missing)}")


@dataclass(frozen=True)
class Settings:
    project_endpoint: str
    model_deployment: str
    agent_name: str = DEFAULT_AGENT_NAME
    data_file: str = DEFAULT_DATA_FILE


def load_settings(env_file: str = ".env", data_file: str = None, agent_name: str = None) -> Settings:
    """
    Build `Settings` from the environment.

    Values from `env_file` are loaded first but never override variables already set in the process
    environment. Explicit `data_file` / `agent_name` arguments (from the command line) win over both.

    Raises:
        ConfigurationError: if the project endpoint or the model deployment name is missing.
    """
    load_dotenv(env_file, override=False)

    project_endpoint = os.environ.get(PROJECT_ENDPOINT_VAR, "").strip()
    model_deployment = os.environ.get(MODEL_DEPLOYMENT_VAR, "").strip()

    missing = [
        name
        for name, value in ((PROJECT_ENDPOINT_VAR, project_endpoint), (MODEL_DEPLOYMENT_VAR, model_deployment))
        if not value
    ]
    if missing:
        raise ConfigurationError(missing)

    return Settings(
        project_endpoint=project_endpoint,
        model_deployment=model_deployment,
        agent_name=agent_name or os.environ.get(AGENT_NAME_VAR) or DEFAULT_AGENT_NAME,
        data_file=data_file or os.environ.get(DATA_FILE_VAR) or DEFAULT_DATA_FILE,
    )
