# contentsync/content/schema/careers.py
"""Canonical defaults for the `careers` page."""

CAREERS_SLUG = "careers"

CAREERS_DEFAULTS = {
    "hero": {
        "title": "Build the future\nof Event Planning",
        "description": (
            "We believe that when every person and business can tailor event "
            "planning to their unique needs, the world becomes better at "
            "celebrating life's moments."
        ),
        "button_text": "View open positions",
        "button_link": "/careers/positions",
        "image": None,
        "carousel_images": [
            "https://images.unsplash.com/photo-1494790108377-be9c29b29330?w=600&h=800&fit=crop&q=80",
            "https://images.unsplash.com/photo-1506794778202-cad84cf45f1d?w=600&h=800&fit=crop&q=80",
            "https://images.unsplash.com/photo-1534528741775-53994a69daeb?w=600&h=800&fit=crop&q=80",
        ],
    },
    "stats": {
        "team_members": "50+",
        "open_positions": "10+",
        "locations": "3",
        "founded": "2023",
    },
    "story": {
        "headline": "Our story",
        "paragraphs": [
            "Early event planning pioneers envisioned a future where technology "
            "could amplify our ability to celebrate life's moments.",
            "At its core, OpusFesta is a toolbox of event planning tools that let "
            "you manage your celebrations however you find most useful.",
        ],
        "image": None,
        "link_text": "Browse open positions",
        "link_url": "/careers/positions",
    },
    "diversity": {
        "quote": (
            "People do their best work when they feel like they belong: "
            "included, valued, and equal."
        ),
        "background_image": None,
    },
    "testimonials": {
        "headline": "Employee Experience",
        "items": [
            {
                "quote": (
                    "The team's passion for making event planning accessible to "
                    "everyone in Tanzania is truly inspiring."
                ),
                "name": "Sarah Mwangi",
                "role": "Senior Product Designer",
            },
        ],
    },
    "culture": {
        "headline": "Office culture",
        "paragraphs": [
            "OpusFesta is an in-person company with two Anchor Days each week.",
        ],
    },
    "values": {
        "headline": "Our values",
        "items": [
            {
                "title": "We are drivers of our mission.",
                "description": "We plan and celebrate events exactly the way our users want.",
            },
            {
                "title": "Be a pace setter.",
                "description": "We move with urgency and ship great products faster.",
            },
            {
                "title": "Be a truth seeker.",
                "description": "We pursue the best data, ideas, and solutions with rigor.",
            },
            {
                "title": "Be kind and direct.",
                "description": "We deliver feedback in the spirit of helping each other improve.",
            },
        ],
    },
    "perks": {
        "headline": "The upside",
        "description": "Competitive, innovative, and inclusive benefits for everyone.",
        "items": [
            {"title": "Medical, dental & vision", "description": "Coverage for employees and dependents.", "icon": "hospital"},
            {"title": "Time off", "description": "Flexible paid vacation and observed holidays.", "icon": "umbrella"},
            {"title": "Parental leave", "description": "Paid time off for new parents.", "icon": "baby"},
        ],
    },
    "values_in_action": {
        "headline": "Our values in action",
        "affinity_groups": {
            "title": "Affinity groups",
            "description": "Employee-led groups that foster a diverse and inclusive workplace.",
        },
        "nonprofits": {
            "title": "OpusFesta for Nonprofits",
            "description": "Nonprofit organizations get 50% off our team plan.",
        },
        "social_impact": {
            "title": "Social impact",
            "description": "Programs and partnerships dedicated to inclusion and equity.",
            "programs": [
                {"title": "Volunteering at Local Events", "description": "Helping students find their voices as event planners."},
                {"title": "Tech Education Programs", "description": "Helping people pivot into careers in tech."},
            ],
        },
    },
    "process": {
        "headline": "The Journey",
        "subheadline": "How we hire",
        "steps": [
            {"id": 1, "title": "Application", "description": "Submit your application through our portal."},
            {"id": 2, "title": "Initial Review", "description": "Our team reviews your application and portfolio."},
            {"id": 3, "title": "Interview", "description": "A conversation about your experience and our mission."},
            {"id": 4, "title": "Team Meeting", "description": "Meet the wider team."},
            {"id": 5, "title": "Offer", "description": "We extend a competitive offer."},
        ],
    },
    "video": {
        "title": "Life at OpusFesta",
        "image": None,
        "video_url": None,
    },
}
