"""
Azure AI Foundry Code Interpreter demo: a registered prompt agent analyzes `sales_data.csv`.

Prerequisites:
    pip install -e .
    az login

Environment variables (or a `.env` file in the working directory):
    AZURE_FOUNDRY_PROJECT_ENDPOINT - Azure AI Foundry project endpoint
    AZURE_FOUNDRY_GPT_MODEL        - model deployment name (e.g. gpt-4.1-mini)

Run:
    foundry-sales-analysis --data-file ./sales_data.csv
"""

import argparse
import asyncio
import logging
import os
import sys
from contextlib import asynccontextmanager

import openai
from azure.ai.projects.aio import AIProjectClient
from azure.core.exceptions import ClientAuthenticationError, ResourceNotFoundError, ServiceRequestError
from azure.identity.aio import DefaultAzureCredential

from foundry_agent.agent_session import AgentRegistrationError, AgentSession
from foundry_agent.config import (
    MODEL_DEPLOYMENT_VAR,
    PROJECT_ENDPOINT_VAR,
    ConfigurationError,
    Settings,
    load_settings,
)
from foundry_agent.report import RULE, print_response
from foundry_agent.sales_data import DataFileError, read_sales_data

logger = logging.getLogger(__name__)

BANNER = "=" * 60

ANALYSIS_QUESTIONS = """Please analyze this data and:
1. Calculate the total annual sales, expenses, and profit
2. Identify the month with the highest profit
3. Calculate the average monthly profit margin (profit/sales * 100)
4. Provide a brief summary of the business performance

Use Python code to perform these calculations."""

LOGIN_HINT = "Tip: Make sure you're logged in with 'az login'"
ENDPOINT_HINT = f"Tip: Check that your {PROJECT_ENDPOINT_VAR} is correct"
MODEL_HINT = "Tip: Agent creation failed. Check your model deployment name."


def build_analysis_prompt(csv_content: str) -> str:
    return f"Here is a CSV file with sales data:\n\n```csv\n{csv_content}\n```\n\n{ANALYSIS_QUESTIONS}"


def failure_hints(error: BaseException) -> list[str]:
    """Pick user hints for a pipeline failure from the error type (and its cause)."""
    hints = []
    causes = [error]
    if error.__cause__ is not None:
        causes.append(error.__cause__)

    auth_failure = any(isinstance(e, (ClientAuthenticationError, openai.AuthenticationError)) for e in causes)
    unreachable = any(isinstance(e, (ServiceRequestError, openai.APIConnectionError)) for e in causes)

    if auth_failure:
        hints.append(LOGIN_HINT)
    if unreachable or any(
        isinstance(e, (ResourceNotFoundError, openai.NotFoundError)) or getattr(e, "status_code", None) == 404
        for e in causes
    ):
        hints.append(ENDPOINT_HINT)
    # the first remote call is agent registration, so sign-in and connection failures surface there too
    if isinstance(error, AgentRegistrationError) and not (auth_failure or unreachable):
        hints.append(MODEL_HINT)
    return hints


def report_failure(error: BaseException) -> None:
    print(f"\nError occurred: {error}")
    logger.debug("[Foundry Agent] Pipeline failed", exc_info=error)
    for hint in failure_hints(error):
        print(f"\n{hint}")


@asynccontextmanager
async def open_project(settings: Settings):
    """Authenticated project client; the credential and client are closed on exit."""
    async with DefaultAzureCredential() as credential:
        async with AIProjectClient(endpoint=settings.project_endpoint, credential=credential) as project:
            yield project


async def run_pipeline(session: AgentSession, prompt: str):
    print("Getting OpenAI client...")
    session.connect()
    print("✓ OpenAI client ready.\n")

    print("Creating registered AI Agent with Code Interpreter...")
    agent = await session.register_agent()
    print(f" - Agent ID: {agent.id}")
    print(f" - Agent Name: {agent.name}")
    print(f" - Agent Version: {agent.version}\n")

    print("Creating conversation thread...")
    conversation = await session.open_conversation()
    print(f"✓ Conversation created (ID: {conversation.id})\n")

    print(RULE)
    print("USER MESSAGE:")
    print(RULE)
    print("Analyzing sales data with Code Interpreter...")
    print(RULE + "\n")

    print("Running registered Agent via Responses API...\n")
    response = await session.ask(prompt)

    print_response(response)

    print("\n✓ Analysis completed!")
    print(RULE)
    return response


async def analyze(settings: Settings, csv_content: str):
    """
    Register the agent, run the analysis prompt and reclaim remote resources.

    Errors from the remote platform are reported, not raised; returns the response or None on failure.
    """
    prompt = build_analysis_prompt(csv_content)
    session = None
    try:
        print("Initialising Azure AI Projects client...")
        async with open_project(settings) as project:
            print("✓ Client initialised.\n")
            session = AgentSession(project, agent_name=settings.agent_name, model=settings.model_deployment)
            async with session:
                try:
                    return await run_pipeline(session, prompt)
                except Exception as e:
                    report_failure(e)
    except Exception as e:
        report_failure(e)
        if session is None:
            print("\nCleaning up resources...")
    return None


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Analyze sales data with an Azure AI Foundry Code Interpreter agent.")
    parser.add_argument("--data-file", default=None, help="CSV file to analyze (default: ./sales_data.csv)")
    parser.add_argument("--agent-name", default=None, help="Name of the agent to register (default: DataAnalystAgent)")
    parser.add_argument("--env-file", default=".env", help="Optional dotenv file to load before reading the environment")
    parser.add_argument(
        "--log-level", default=os.environ.get("LOG_LEVEL", "WARNING"), help="Python logging level (default: WARNING)"
    )
    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.WARNING))
    for name in ("azure.core.pipeline.policies.http_logging_policy", "azure.identity", "httpx"):
        logging.getLogger(name).setLevel(logging.WARNING)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        settings = load_settings(env_file=args.env_file, data_file=args.data_file, agent_name=args.agent_name)
    except ConfigurationError as e:
        print("Error: Environment variables not set properly!", file=sys.stderr)
        print(f"Please set {PROJECT_ENDPOINT_VAR} and {MODEL_DEPLOYMENT_VAR}", file=sys.stderr)
        logger.error(f"[Foundry Agent] {e}")
        return 1

    print(BANNER)
    print("AZURE AI FOUNDRY - Code Interpreter Demo v2 (Python)")
    print("Using Registered Agent with Code Interpreter Tool")
    print(BANNER)
    print(f"\nEndpoint: {settings.project_endpoint}")
    print(f"Model Deployment: {settings.model_deployment}\n")

    try:
        csv_content = read_sales_data(settings.data_file)
    except DataFileError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Please ensure the sales data CSV exists and is UTF-8 text (see --data-file).", file=sys.stderr)
        return 1
    print(f"✓ Found data file: {settings.data_file}\n")

    asyncio.run(analyze(settings, csv_content))
    return 0


if __name__ == "__main__":
    sys.exit(main())
