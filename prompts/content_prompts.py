# Instruction templates for text, image-search, quiz and social-post generation

TEXT_SYSTEM_PROMPT = "You are a helpful assistant who provides informative and educational content."

IMAGE_PROMPTS_SYSTEM_PROMPT = """Create {count} short, concrete image search queries for realistic photos that illustrate this text.
Return ONLY a JSON array of {count} strings. Do not include any other text or formatting."""

MCQ_COMMON_INSTRUCTIONS = """Create {count} multiple-choice questions based on the given text.
Each question should have 4 options with only one correct answer.
Return ONLY a valid JSON array of objects, each with: 'question' (string), 'options' (array of 4 strings), and 'correctAnswer' (index of correct option from 0 to 3).
Do not include any other text or formatting."""

MCQ_DIFFICULTY_GUIDANCE = {
    "easy": "Ask basic questions with straightforward answers taken directly from the text.",
    "medium": "Ask moderate questions that require understanding the text, not just recalling it.",
    "hard": "Ask challenging questions that require reasoning about and connecting ideas in the text.",
}

SOCIAL_POST_COMMON_INSTRUCTIONS = """Write one social media post based on the text provided by the user.
Return ONLY the post itself, ready to paste, with no explanations or surrounding quotes.
Keep it under 280 words and end with 3-5 relevant hashtags."""

SOCIAL_POST_STYLES = {
    "informative-summary": "**INFORMATIVE SUMMARY:** Professional, clear summary of the key facts and insights.",
    "tips-carousel": "**TIPS CAROUSEL:** Break the content into numbered, actionable steps, one per carousel slide.",
    "motivational-quote": "**MOTIVATIONAL QUOTE + HOOK:** Open with an emotional hook, build to one powerful quote.",
    "stats-based": "**DID YOU KNOW?:** Lead with the most surprising fact or statistic from the text.",
    "personal-journey": "**PERSONAL JOURNEY:** Tell it as a relatable first-person story with a reflection and encouragement.",
    "experimental-remix": "**AI REMIX:** Creative, Gen Z-friendly voice with humor and modern flair.",
}

SOCIAL_POST_LEVELS = {
    "beginner": "The audience is new to the topic: avoid jargon and explain terms.",
    "intermediate": "The audience knows the basics: skip definitions and focus on insights.",
    "advanced": "The audience are practitioners: be precise and assume domain vocabulary.",
}


def build_mcq_prompt(count: int, difficulty: str = None) -> str:
    """Build the quiz instructions, optionally tuned to a difficulty level."""
    prompt = MCQ_COMMON_INSTRUCTIONS.format(count=count)
    if difficulty:
        prompt += "\n" + MCQ_DIFFICULTY_GUIDANCE[difficulty]
    return prompt


def build_social_post_prompt(post_type: str, user_level: str = None) -> str:
    """Build the social post instructions for a post type and audience level."""
    prompt = f"{SOCIAL_POST_COMMON_INSTRUCTIONS}\n\n{SOCIAL_POST_STYLES[post_type]}"
    if user_level:
        prompt += f"\n{SOCIAL_POST_LEVELS[user_level]}"
    return prompt
