# Demo entries for trying the app: one per day over the previous two weeks.
from datetime import datetime, timedelta

import journal

# (days ago, mood, prompt, content)
DEMO_SEED = [
    (1, "amazing", "What's one thing you're looking forward to today?",
     "Took a long walk in the park before work and the sun was out the whole time. "
     "I felt calm and grateful, and the meeting afterwards went better than expected."),
    (2, "low", "What's been taking up most of your mental space lately?",
     "The project deadline is close and I feel overwhelmed. Talked to my boss and she was kind about it, "
     "but I'm still worried I won't finish in time."),
    (3, "good", "What moment from today are you most grateful for?",
     "Dinner with my family tonight. Mom cooked and we stayed at the table for hours. "
     "Moments like that make me feel blessed."),
    (4, "okay", "How are you feeling right now, in this moment?",
     "An ordinary day at the office. Nothing special happened, lunch alone, TV in the evening. "
     "I might be in a bit of a rut."),
    (5, "amazing", "What's something new you tried recently?",
     "Started learning guitar! My fingers hurt but making music again makes me so happy. "
     "I want to keep this as a weekly goal."),
    (6, "low", "What's weighing on your mind right now? Let it all out.",
     "Couldn't sleep last night. My mind kept racing about work and the future and I woke up exhausted."),
    (7, "good", "What did you accomplish today that you're proud of?",
     "Finished the presentation I'd been dreading. A colleague said it was clear and I felt proud "
     "and accomplished for the rest of the day."),
    (8, "good", "Who are you grateful for in your life?",
     "Video call with my best friend who moved abroad. It felt like nothing had changed. "
     "Thankful for that connection."),
    (9, "struggling", "What challenged you today?",
     "Had a disagreement at work and I keep replaying it. I feel frustrated and hurt, "
     "and a little confused about what I should have said."),
    (10, "amazing", "What progress have you noticed in yourself lately?",
     "Ran five miles without stopping this morning. A few months ago I could barely do one. "
     "The exercise is paying off and I feel hopeful."),
    (11, "good", "What does peace look like for you today?",
     "Quiet Sunday. Pancakes, a book by the window, a short walk outside. Peaceful and slow."),
    (12, "okay", "How did you handle a difficult situation recently?",
     "Got hard feedback on my project. It stung, but I can see the point and want to improve."),
    (13, "amazing", "When did you last feel fully in the zone?",
     "Spent hours on a creative side project and lost track of time. I want to create like this more often. "
     "Totally inspired."),
    (14, "low", "What memory came up for you today?",
     "Missing home. Saw an old photo of summers with my sister and felt lonely. Called dad and it helped."),
]


def demo_entries(now: datetime) -> list:
    """Demo entries newest first, scored by the regular scorer and extractor."""
    created = []
    for days_ago, mood, prompt, content in sorted(DEMO_SEED, key=lambda s: -s[0]):
        when = now - timedelta(days=days_ago)
        created.append(journal.create_entry(content, mood, when, prompt=prompt, entries=created))
    return list(reversed(created))


def seed_state(now: datetime, prompt: str = "") -> journal.JournalState:
    return journal.initial_state(demo_entries(now), now, prompt=prompt)
