"""Prompt templates for LLM calls."""

CHAT_SYSTEM_PROMPT = """You are an expert coding agent. You can read, analyze, edit, and fix code.
You have access to the user's codebase. When suggesting changes, provide complete code blocks with file paths.

Format each changed file as:
File: `path/to/file.ext`
```language
complete file content
```

Current codebase context:
{context}"""


REVIEW_PROMPT = """Review this code and provide detailed feedback on bugs, performance, security, and best practices:

{content}"""


FIX_PROMPT = """Analyze this code from {file} and provide fixes for any bugs:

```
{content}
```

Provide the complete fixed code as:
File: `{file}`
```language
complete fixed code
```"""


REFACTOR_PROMPT = """Refactor this code from {file}{focus}:

```
{content}
```

Provide the complete refactored code as:
File: `{file}`
```language
complete refactored code
```"""


GENERATE_PROMPT = """Generate {kind} based on: {description}

{framework_line}{context}

Requirements:
- Create complete, production-ready code
- Include all necessary files with proper file paths
- Add proper error handling and validation
- Follow best practices and modern patterns
- Include package.json/requirements.txt if needed

Format each file as:
File: `path/to/file.ext`
```language
code content
```

Generate the complete {kind}:"""
