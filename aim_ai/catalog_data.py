# aim_ai/catalog_data.py

"""
Built-in course catalog.

Loaded once at startup by aim_ai.modules.catalog.load_catalog() unless
AIM_AI_CATALOG points at a JSON file with the same shape.
Module order inside each course is the playback order.
"""

COURSES = [
    {
        "id": "c1",
        "title": "Modern React Patterns",
        "description": "Master advanced React hooks, performance optimization, and scalable architecture.",
        "thumbnail": "https://picsum.photos/400/225?random=1",
        "instructor": "Sarah Drasner",
        "level": "Advanced",
        "total_students": 1240,
        "modules": [
            {
                "id": "m1-1",
                "title": "Introduction to Hooks",
                "kind": "text",
                "duration_minutes": 10,
                "content": (
                    "# Introduction to Hooks\n\n"
                    "Hooks are a new addition in React 16.8. They let you use state and other "
                    "React features without writing a class.\n\n"
                    "### Rules of Hooks\n"
                    "1. Only call Hooks at the top level.\n"
                    "2. Only call Hooks from React function components."
                ),
            },
            {
                "id": "m1-2",
                "title": "The useEffect Dependency Array",
                "kind": "video",
                "duration_minutes": 15,
                "content": "https://picsum.photos/800/450?random=10",  # placeholder video
            },
            {
                "id": "m1-3",
                "title": "Custom Hooks Quiz",
                "kind": "quiz",
                "duration_minutes": 5,
                "content": "What is the primary rule for naming custom hooks?",
            },
        ],
    },
    {
        "id": "c2",
        "title": "UI/UX Principles for Devs",
        "description": "Learn the fundamentals of color theory, typography, and layout design.",
        "thumbnail": "https://picsum.photos/400/225?random=2",
        "instructor": "Gary Simon",
        "level": "Beginner",
        "total_students": 850,
        "modules": [
            {
                "id": "m2-1",
                "title": "Color Theory 101",
                "kind": "text",
                "duration_minutes": 12,
                "content": (
                    "# Color Theory\n\n"
                    "Understanding the color wheel is essential for creating visually appealing interfaces."
                ),
            },
            {
                "id": "m2-2",
                "title": "Typography Basics",
                "kind": "text",
                "duration_minutes": 20,
                "content": "# Typography\n\nLearn about serif vs sans-serif, line-height, and hierarchy.",
            },
        ],
    },
    {
        "id": "c3",
        "title": "Fullstack Next.js 14",
        "description": "Build production-ready applications with the App Router and Server Actions.",
        "thumbnail": "https://picsum.photos/400/225?random=3",
        "instructor": "Lee Robinson",
        "level": "Intermediate",
        "total_students": 3200,
        "modules": [
            {
                "id": "m3-1",
                "title": "App Router Fundamentals",
                "kind": "video",
                "duration_minutes": 25,
                "content": "https://picsum.photos/800/450?random=11",
            },
        ],
    },
]
