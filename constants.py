"""Constants and prompt text."""

# Prompt sent with every uploaded flag photo
FLAG_ANALYSIS_PROMPT = (
    "Analyze this flag image for educational purposes and provide the following information:\n"
    "1. Flag identification (country/entity, type, adoption date, aspect ratio, nicknames)\n"
    "2. Design elements (colors, symbols, pattern, symbolic meaning)\n"
    "3. Historical context (origin, designer, evolution, significant events, cultural impact)\n"
    "4. Protocol and usage (official status, display guidelines, half-staff protocol, disposal method)\n"
    "5. Additional information (related celebrations, similar flags, international recognition, interesting facts)\n"
    "\n"
    "IMPORTANT: This is for educational purposes only."
)

# Analysis shown on first load, before any upload
DEFAULT_ANALYSIS = """1. Flag Identification:
- Country: United States of America
- Type: National flag
- Adoption Date: June 14, 1777 (original design), July 4, 1960 (current 50-star design)
- Aspect Ratio: 10:19
- Nicknames: "Stars and Stripes", "Old Glory", "The Star-Spangled Banner"

2. Design Elements:
- Colors: Red, White, and Blue
- Symbols: 50 white stars on blue canton representing the 50 states, 13 alternating red and white stripes representing the original 13 colonies
- Pattern: Rectangular, with a blue rectangle in the upper hoist-side corner
- Symbolic Meaning: Stars represent the states in the union, stripes represent the founding colonies, colors represent valor (red), purity and innocence (white), vigilance, perseverance and justice (blue)

3. Historical Context:
- Origin: Based on the "Grand Union Flag" and influenced by the British East India Company flag
- Designer: Unclear for the original, but officially attributed to congressman Francis Hopkinson
- Evolution: Has changed 27 times as stars were added for new states
- Significant Events: Inspired the national anthem after the Battle of Fort McHenry (1814)
- Cultural Impact: One of the most recognizable flags in the world

4. Protocol & Usage:
- Official Status: National flag of the United States
- Display Guidelines: Should not touch the ground, typically flown from sunrise to sunset
- Half-Staff Protocol: By presidential proclamation following significant deaths or tragedies
- Disposal Method: Should be burned respectfully when no longer serviceable
- Pledge of Allegiance: Associated with flag salute in schools and public events

5. Additional Information:
- Flag Day: Celebrated annually on June 14th
- Similar Flags: Liberia, Malaysia, and Chile have somewhat similar designs
- International Recognition: Universally recognized symbol of the United States
- Moon Placement: Six American flags have been placed on the Moon by Apollo missions
- Interesting Facts: The current 50-star design was created by a high school student, Robert G. Heft, as a school project"""

# User-facing intake messages
INVALID_IMAGE_MESSAGE = "Please upload a valid image file"
IMAGE_TOO_LARGE_MESSAGE = "Image size should be less than 20MB"
UNREADABLE_IMAGE_MESSAGE = "Failed to read the image file. Please try again."

# Magic-byte signatures for the accepted formats
IMAGE_SIGNATURES = {
    "image/jpeg": b"\xff\xd8",
    "image/png": b"\x89PNG\r\n\x1a\n",
}
