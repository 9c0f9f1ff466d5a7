# plan_templates.py
"""
Fixed local workout templates, one per goal.

Each exercise row is (name, sets, reps, rest_seconds, target_muscle); difficulty
is stamped from the requested fitness level when the plan is built.
"""
from models import Goal

PLAN_TEMPLATES = {
    Goal.LOSE: {
        "title": "Fat Burning Program",
        "description": "Designed for your BMI of {bmi} ({category}), this high-intensity program "
                       "focuses on burning calories while building lean muscle.",
        "exercises": [
            ("Jumping Jacks", 3, "30 seconds", 20, "Full Body"),
            ("Burpees", 3, "10-15", 30, "Full Body"),
            ("Mountain Climbers", 3, "20", 20, "Core"),
            ("High Knees", 3, "30 seconds", 20, "Cardio"),
            ("Squat Jumps", 3, "12", 30, "Legs"),
            ("Plank", 3, "45 seconds", 30, "Core"),
        ],
        "tips": [
            "Focus on high-intensity intervals for maximum calorie burn",
            "Stay hydrated throughout your workout",
            "Combine with a caloric deficit diet for best results",
            "Rest 24-48 hours between intense sessions",
        ],
        "weekly_schedule": [
            ("Monday", "HIIT Cardio", ["Jumping Jacks", "Burpees", "Mountain Climbers"]),
            ("Tuesday", "Lower Body", ["Squats", "Lunges", "Squat Jumps"]),
            ("Wednesday", "Active Recovery", ["Light Walking", "Stretching"]),
            ("Thursday", "Upper Body", ["Push-ups", "Dips", "Plank"]),
            ("Friday", "Full Body HIIT", ["Burpees", "High Knees", "Mountain Climbers"]),
            ("Saturday", "Cardio", ["Running", "Jump Rope", "Cycling"]),
            ("Sunday", "Rest", ["Complete Rest", "Light Stretching"]),
        ],
    },

    Goal.GAIN: {
        "title": "Muscle Building Program",
        "description": "Tailored for your BMI of {bmi} ({category}), this strength-focused program "
                       "will help you build lean muscle mass.",
        "exercises": [
            ("Barbell Squats", 4, "8-10", 90, "Legs"),
            ("Bench Press", 4, "8-10", 90, "Chest"),
            ("Deadlifts", 4, "6-8", 120, "Back"),
            ("Overhead Press", 3, "8-10", 60, "Shoulders"),
            ("Pull-ups", 3, "8-12", 60, "Back"),
            ("Barbell Rows", 4, "8-10", 60, "Back"),
        ],
        "tips": [
            "Focus on progressive overload - increase weight gradually",
            "Consume 1.6-2.2g protein per kg of body weight",
            "Get 7-9 hours of sleep for optimal recovery",
            "Eat in a slight caloric surplus (300-500 calories)",
        ],
        "weekly_schedule": [
            ("Monday", "Chest & Triceps", ["Bench Press", "Incline Press", "Dips"]),
            ("Tuesday", "Back & Biceps", ["Deadlifts", "Pull-ups", "Rows"]),
            ("Wednesday", "Rest", ["Light Stretching"]),
            ("Thursday", "Legs", ["Squats", "Leg Press", "Calf Raises"]),
            ("Friday", "Shoulders & Arms", ["Overhead Press", "Lateral Raises", "Curls"]),
            ("Saturday", "Full Body", ["Compound Movements", "Core Work"]),
            ("Sunday", "Rest", ["Complete Rest", "Active Recovery"]),
        ],
    },

    Goal.MAINTAIN: {
        "title": "Balanced Fitness Program",
        "description": "Perfect for your BMI of {bmi} ({category}), this balanced program maintains "
                       "your current fitness while preventing muscle loss.",
        "exercises": [
            ("Goblet Squats", 3, "12-15", 60, "Legs"),
            ("Push-ups", 3, "15-20", 45, "Chest"),
            ("Dumbbell Rows", 3, "12", 45, "Back"),
            ("Plank", 3, "60 seconds", 30, "Core"),
            ("Lunges", 3, "12 each leg", 45, "Legs"),
            ("Shoulder Press", 3, "12", 45, "Shoulders"),
        ],
        "tips": [
            "Maintain consistency - 3-4 workouts per week is ideal",
            "Mix cardio and strength training for balanced fitness",
            "Focus on quality of movement over quantity",
            "Listen to your body and adjust intensity as needed",
        ],
        "weekly_schedule": [
            ("Monday", "Full Body Strength", ["Squats", "Push-ups", "Rows"]),
            ("Tuesday", "Cardio", ["30min Running", "Jump Rope"]),
            ("Wednesday", "Rest", ["Light Walking", "Stretching"]),
            ("Thursday", "Upper Body", ["Push-ups", "Shoulder Press", "Rows"]),
            ("Friday", "Lower Body", ["Squats", "Lunges", "Calf Raises"]),
            ("Saturday", "Active Recovery", ["Yoga", "Light Cardio"]),
            ("Sunday", "Rest", ["Complete Rest"]),
        ],
    },
}

if set(PLAN_TEMPLATES) != set(Goal):
    raise RuntimeError("every goal needs a local plan template")
