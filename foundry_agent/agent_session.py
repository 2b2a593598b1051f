"""
Scoped lifecycle for a registered Foundry prompt agent with the hosted Code Interpreter tool.

`AgentSession` owns the two remote handles the demo creates, the agent version and the conversation,
and deletes whichever of them exist when the `async with` block exits.
"""

import logging

from azure.ai.projects.models import CodeInterpreterTool, CodeInterpreterToolAuto, PromptAgentDefinition

logger = logging.getLogger(__name__)


INSTRUCTIONS = """You are a helpful data analyst assistant.
Use the Code Interpreter tool to execute Python code for data analysis.
Always explain your analysis clearly and provide insights from the data."""


class AgentRegistrationError(Exception):
    """Raised when the platform rejects the agent definition (e.g. an unknown model deployment)."""


def build_agent_definition(model: str, instructions: str = INSTRUCTIONS) -> PromptAgentDefinition:
    return PromptAgentDefinition(
        model=model,
        instructions=instructions,
        tools=[CodeInterpreterTool(container=CodeInterpreterToolAuto())],
    )


class AgentSession:
    def __init__(self, project, agent_name: str, model: str, instructions: str = INSTRUCTIONS):
        self.project = project
        self.agent_name = agent_name
        self.model = model
        self.instructions = instructions

        self.openai_client = None
        self.agent = None
        self.conversation = None

    async def __aenter__(self) -> "AgentSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def connect(self):
        """Derive the OpenAI-compatible client (conversations, responses) from the project client."""
        if self.openai_client is None:
            self.openai_client = self.project.get_openai_client()
        return self.openai_client

    async def register_agent(self):
        """Create a new version of the named agent with the Code Interpreter tool attached."""
        try:
            self.agent = await self.project.agents.create_version(
                agent_name=self.agent_name,
                definition=build_agent_definition(self.model, self.instructions),
            )
        except Exception as e:
            raise AgentRegistrationError(f"Agent creation failed for '{self.agent_name}': {e}") from e
        logger.info(f"[Foundry Agent] Registered agent {self.agent.name} v{self.agent.version} (id={self.agent.id})")
        return self.agent

    async def open_conversation(self):
        self.conversation = await self.connect().conversations.create()
        logger.info(f"[Foundry Agent] Created conversation {self.conversation.id}")
        return self.conversation

    def agent_reference(self) -> dict:
        return {"name": self.agent.name, "type": "agent_reference"}

    async def ask(self, prompt: str):
        """Send one prompt to the registered agent within the open conversation and wait for the response."""
        if self.agent is None:
            raise RuntimeError("Agent must be registered before asking")
        if self.conversation is None:
            raise RuntimeError("Conversation must be opened before asking")
        logger.info(f"[Foundry Agent] Sending prompt ({len(prompt)} chars) to agent {self.agent.name}")
        return await self.connect().responses.create(
            conversation=self.conversation.id,
            input=prompt,
            extra_body={"agent": self.agent_reference()},
        )

    async def close(self) -> None:
        """
        Best-effort deletion of the conversation and the agent version, then release of the OpenAI client.

        Each deletion is attempted independently; failures are reported and swallowed. Handles are
        dropped before the remote call so that a second `close()` never deletes anything twice.
        """
        print("\nCleaning up resources...")

        conversation, self.conversation = self.conversation, None
        if conversation is not None and self.openai_client is not None:
            try:
                await self.openai_client.conversations.delete(conversation_id=conversation.id)
                print("✓ Conversation deleted.")
                logger.info(f"[Foundry Agent] Deleted conversation {conversation.id}")
            except Exception as e:
                print(f"Note: Could not delete conversation: {e}")
                logger.warning(f"[Foundry Agent] Failed to delete conversation {conversation.id}: {e}")

        agent, self.agent = self.agent, None
        if agent is not None:
            try:
                await self.project.agents.delete_version(agent_name=agent.name, agent_version=agent.version)
                print(f"✓ Agent deleted ({agent.name} v{agent.version}).")
                logger.info(f"[Foundry Agent] Deleted agent {agent.name} v{agent.version}")
            except Exception as e:
                print(f"Note: Could not delete agent: {e}")
                logger.warning(f"[Foundry Agent] Failed to delete agent {agent.name} v{agent.version}: {e}")

        openai_client, self.openai_client = self.openai_client, None
        if openai_client is not None:
            try:
                await openai_client.close()
            except Exception as e:
                print(f"Note: Could not close OpenAI client: {e}")
                logger.warning(f"[Foundry Agent] Failed to close OpenAI client: {e}")
