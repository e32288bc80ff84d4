"""Static school content consumed by the assistant panels."""

from vaatsalya.models import Story

STORIES: tuple[Story, ...] = (
    Story(
        id=1,
        name="Nikolay",
        summary="Overcame severe math anxiety to become a confident problem-solver.",
        full_story=(
            "Nikolay used to panic at the sight of numbers. Our personalized approach, which "
            "focused on breaking down problems into testable steps, allowed him to see "
            "mathematics not as a rigid rulebook, but as a flexible tool for understanding "
            "the world. By the end of the year, he was tutoring his peers."
        ),
    ),
    Story(
        id=2,
        name="Ilshat",
        summary="Expanded her active vocabulary and diminished her fear of public speaking.",
        full_story=(
            "Ilshat's success story is rooted in our kindness and emotional well-being focus. "
            "We created a 'safe-to-fail' environment where mistakes were celebrated as data "
            "points. This radically expanded her active vocabulary and, most importantly, "
            "helped her conquer her fear of speaking in front of a class, making her a "
            "leading voice in school debates."
        ),
    ),
    Story(
        id=3,
        name="Alexandra",
        summary="Transformed confusion into clarity, mastering complex science concepts.",
        full_story=(
            "Alexandra came to Vaatsalya feeling overwhelmed by complex science topics. Our "
            "curriculum's emphasis on visual and 2D-graphic learning tools helped her sort out "
            "the 'mess' of abstract concepts. She now designs her own experimental procedures "
            "and leads the school's robotics club, demonstrating a profound confidence in "
            "scientific inquiry."
        ),
    ),
)


def find_story(key: str) -> Story | None:
    """Look up a story by numeric id or case-insensitive name."""
    key = key.strip()
    for story in STORIES:
        if key.isdigit() and int(key) == story.id:
            return story
        if story.name.lower() == key.lower():
            return story
    return None
