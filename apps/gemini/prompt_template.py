VISION_PROMPT = (
    'Generate an image based on this prompt: "{prompt}". '
    'Use the provided reference image as a style guide or inspiration.'
)

TEXT_PROMPT = (
    'Generate an image based on this prompt: "{prompt}". '
    'Create a detailed description of what the image should look like.'
)

CONNECTION_CHECK_PROMPT = "Hello, this is a test connection."
