from langchain_core.prompts import PromptTemplate

FEEDBACK_PROMPT = PromptTemplate(
    input_variables=["transcript"],
    template="""
Analyze the following transcript of a roleplay between an employee (USER) and their
engineering manager, Jordan Lee (MODEL), during a difficult performance conversation.

Transcript:
{transcript}

Provide 3 specific, actionable tips for the employee to improve their communication, tone, and clarity.
Each tip has:
- title: a short headline
- description: one or two sentences of concrete advice grounded in the transcript
- category: exactly one of "Communication", "Tone", "Clarity"
""",
)
