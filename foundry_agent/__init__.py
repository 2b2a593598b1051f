"""
Azure AI Foundry demo: a registered prompt agent that analyzes sales data with the hosted Code Interpreter tool.
"""
