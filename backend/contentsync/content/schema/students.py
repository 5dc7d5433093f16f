# contentsync/content/schema/students.py
"""Canonical defaults for the `careers-students` page."""

STUDENTS_SLUG = "careers-students"

STUDENTS_DEFAULTS = {
    "header": {
        "title": "Meet Our Students",
        "description": (
            "Join a community of talented students building the future of "
            "event planning in Tanzania."
        ),
        "label": "Meet Our Students",
    },
    "profiles": [
        {
            "id": 1,
            "name": "Amina Hassan",
            "image": "https://images.unsplash.com/photo-1534528741775-53994a69daeb?q=80&w=1000&auto=format&fit=crop",
            "filter": "grayscale(100%) contrast(120%)",
            "role": "Software Engineering Intern",
            "quote": "I've built features used by thousands of couples planning their weddings.",
            "achievement": "Led development of vendor search feature",
        },
        {
            "id": 2,
            "name": "James Mwangi",
            "image": "https://images.unsplash.com/photo-1506794778202-cad84cf45f1d?q=80&w=1000&auto=format&fit=crop",
            "filter": "sepia(20%) contrast(110%)",
            "role": "Product Design Intern",
            "quote": "Designing for real users taught me more than any classroom.",
            "achievement": "Redesigned the vendor onboarding flow",
        },
    ],
    "opportunities": [
        {"icon": "GraduationCap", "title": "Internships", "description": "Paid internships across engineering, design, and marketing."},
        {"icon": "Briefcase", "title": "Graduate roles", "description": "Full-time roles for recent graduates."},
    ],
    "benefits": [
        {"title": "Mentorship", "description": "Work alongside experienced engineers and designers."},
        {"title": "Real impact", "description": "Ship features used by couples and vendors every day."},
    ],
    "faq": [
        {"question": "Who can apply?", "answer": "Students currently enrolled in a university or college."},
        {"question": "Are internships paid?", "answer": "Yes, all of our internships are paid."},
    ],
    "timeline": {
        "headline": "How to Apply",
        "steps": [
            {"id": 1, "title": "Apply online", "description": "Submit your application and CV."},
            {"id": 2, "title": "Screening", "description": "A short call with our recruiting team."},
            {"id": 3, "title": "Interview", "description": "Meet the team you would be joining."},
        ],
    },
}
