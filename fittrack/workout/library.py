"""Built-in workout catalog."""

from __future__ import annotations

from fittrack.workout.model import Exercise, WorkoutDefinition


CATEGORIES: tuple[str, ...] = ("Strength", "Cardio", "HIIT", "Yoga")

DIFFICULTY_LABELS: dict[int, str] = {
    1: "Beginner",
    2: "Beginner",
    3: "Intermediate",
    4: "Advanced",
    5: "Advanced",
}


WORKOUTS: tuple[WorkoutDefinition, ...] = (
    WorkoutDefinition(
        id="push-day-blast",
        name="Push Day Blast",
        category="Strength",
        description=(
            "Build upper body strength with this comprehensive push workout "
            "targeting chest, shoulders, and triceps."
        ),
        duration_min=30,
        calories=250,
        difficulty=3,
        equipment=("Bodyweight", "Dumbbells"),
        exercises=(
            Exercise(
                id="pushups",
                name="Push-ups",
                sets=3,
                reps=12,
                rest_sec=45,
                instructions=(
                    "Start in a plank position with hands slightly wider than shoulders. "
                    "Lower your body until chest nearly touches the floor, then push back up."
                ),
                tips="Keep your core tight and maintain a straight line from head to heels.",
            ),
            Exercise(
                id="pike-pushups",
                name="Pike Push-ups",
                sets=3,
                reps=8,
                rest_sec=45,
                instructions=(
                    "Start in downward dog position. Lower your head toward the ground "
                    "by bending your elbows, then push back up."
                ),
                tips="Focus on your shoulders doing the work. Keep your legs as straight as possible.",
            ),
            Exercise(
                id="tricep-dips",
                name="Tricep Dips",
                sets=3,
                reps=10,
                rest_sec=45,
                instructions=(
                    "Sit on edge of chair/bench, hands beside hips. Lower body by bending "
                    "elbows, then push back up."
                ),
                tips="Keep your back close to the chair and focus on using your triceps.",
            ),
            Exercise(
                id="plank",
                name="Plank Hold",
                sets=3,
                hold_sec=30,
                rest_sec=30,
                instructions=(
                    "Hold a plank position with forearms on the ground, body in a straight line."
                ),
                tips="Engage your core and breathe steadily. Don't let your hips sag or pike up.",
            ),
            Exercise(
                id="mountain-climbers",
                name="Mountain Climbers",
                sets=3,
                reps=20,
                rest_sec=45,
                instructions=(
                    "Start in plank position. Alternate bringing knees to chest in a running motion."
                ),
                tips="Keep your core engaged and maintain a steady rhythm.",
            ),
            Exercise(
                id="burpees",
                name="Burpees",
                sets=3,
                reps=8,
                rest_sec=60,
                instructions=(
                    "Squat down, jump back to plank, do a push-up, jump feet to hands, "
                    "then jump up with arms overhead."
                ),
                tips="Take your time with form. It's better to do fewer with good technique.",
            ),
        ),
    ),
    WorkoutDefinition(
        id="cardio-core-burn",
        name="Cardio Core Burn",
        category="Cardio",
        description="High-intensity cardio combined with core strengthening.",
        duration_min=30,
        calories=280,
        difficulty=2,
        equipment=("Bodyweight",),
        exercises=(
            Exercise(
                id="jumping-jacks",
                name="Jumping Jacks",
                sets=3,
                hold_sec=45,
                rest_sec=20,
                instructions="Jump feet out while raising arms overhead, then return.",
            ),
            Exercise(
                id="high-knees",
                name="High Knees",
                sets=3,
                hold_sec=30,
                rest_sec=20,
                instructions="Run in place driving knees up to hip height.",
                tips="Stay on the balls of your feet.",
            ),
            Exercise(
                id="bicycle-crunches",
                name="Bicycle Crunches",
                sets=3,
                reps=20,
                rest_sec=30,
                instructions="Alternate elbow to opposite knee while extending the other leg.",
            ),
            Exercise(
                id="dead-bug",
                name="Dead Bug",
                sets=2,
                reps=12,
                rest_sec=30,
                instructions="Lower opposite arm and leg while keeping your lower back flat.",
                tips="Move slowly and exhale as you extend.",
            ),
        ),
    ),
    WorkoutDefinition(
        id="leg-day-thunder",
        name="Leg Day Thunder",
        category="Strength",
        description="Intense lower body workout for serious gains.",
        duration_min=50,
        calories=420,
        difficulty=4,
        equipment=("Dumbbells", "Bench"),
        exercises=(
            Exercise(
                id="goblet-squats",
                name="Goblet Squats",
                sets=4,
                reps=12,
                rest_sec=60,
                instructions="Hold a dumbbell at your chest and squat until thighs are parallel.",
                tips="Drive through your heels.",
            ),
            Exercise(
                id="walking-lunges",
                name="Walking Lunges",
                sets=3,
                reps=20,
                rest_sec=60,
                instructions="Step forward into a lunge, alternating legs as you travel.",
            ),
            Exercise(
                id="romanian-deadlifts",
                name="Romanian Deadlifts",
                sets=4,
                reps=10,
                rest_sec=75,
                instructions="Hinge at the hips with soft knees, lowering weights along your legs.",
                tips="Keep your back flat and feel the stretch in your hamstrings.",
            ),
            Exercise(
                id="bulgarian-split-squats",
                name="Bulgarian Split Squats",
                sets=3,
                reps=10,
                rest_sec=60,
                instructions="Rear foot on the bench, lower until the front thigh is parallel.",
            ),
            Exercise(
                id="wall-sit",
                name="Wall Sit",
                sets=3,
                hold_sec=45,
                rest_sec=45,
                instructions="Sit against a wall with knees at ninety degrees.",
            ),
        ),
    ),
    WorkoutDefinition(
        id="morning-flow",
        name="Morning Flow",
        category="Yoga",
        description="Gentle yoga flow to start your day right.",
        duration_min=25,
        calories=120,
        difficulty=1,
        equipment=("Mat",),
        exercises=(
            Exercise(
                id="cat-cow",
                name="Cat-Cow",
                sets=1,
                reps=10,
                instructions="Alternate arching and rounding your spine on hands and knees.",
            ),
            Exercise(
                id="downward-dog",
                name="Downward Dog",
                sets=2,
                hold_sec=45,
                rest_sec=15,
                instructions="Lift your hips up and back, pressing heels toward the floor.",
            ),
            Exercise(
                id="warrior-two",
                name="Warrior II",
                sets=2,
                hold_sec=30,
                rest_sec=15,
                instructions="Open hips and arms wide, front knee over ankle.",
                tips="Gaze past your front fingertips.",
            ),
            Exercise(
                id="childs-pose",
                name="Child's Pose",
                sets=1,
                hold_sec=60,
                instructions="Sit back onto your heels and stretch your arms forward.",
            ),
        ),
    ),
    WorkoutDefinition(
        id="hiit-inferno",
        name="HIIT Inferno",
        category="HIIT",
        description="Maximum intensity interval training.",
        duration_min=20,
        calories=300,
        difficulty=5,
        equipment=("Bodyweight",),
        exercises=(
            Exercise(
                id="burpees",
                name="Burpees",
                sets=4,
                hold_sec=40,
                rest_sec=20,
                instructions="Squat, jump back to plank, jump in and explode upward.",
            ),
            Exercise(
                id="jump-squats",
                name="Jump Squats",
                sets=4,
                hold_sec=40,
                rest_sec=20,
                instructions="Squat down and jump as high as you can, landing softly.",
            ),
            Exercise(
                id="mountain-climbers",
                name="Mountain Climbers",
                sets=4,
                hold_sec=40,
                rest_sec=20,
                instructions="Drive knees to chest from a plank at a sprint pace.",
                tips="Keep your hips level.",
            ),
        ),
    ),
    WorkoutDefinition(
        id="full-body-fusion",
        name="Full Body Fusion",
        category="Strength",
        description="Complete workout targeting all muscle groups.",
        duration_min=40,
        calories=350,
        difficulty=3,
        equipment=("Bodyweight", "Dumbbells"),
        exercises=(
            Exercise(
                id="squat-to-press",
                name="Squat to Press",
                sets=3,
                reps=12,
                rest_sec=45,
                instructions="Squat with dumbbells at shoulders, then press overhead as you stand.",
            ),
            Exercise(
                id="renegade-rows",
                name="Renegade Rows",
                sets=3,
                reps=10,
                rest_sec=45,
                instructions="From a plank on dumbbells, row one weight at a time.",
                tips="Widen your feet for stability.",
            ),
            Exercise(
                id="reverse-lunges",
                name="Reverse Lunges",
                sets=3,
                reps=12,
                rest_sec=45,
                instructions="Step back into a lunge and return to standing.",
            ),
            Exercise(
                id="side-plank",
                name="Side Plank",
                sets=2,
                hold_sec=30,
                rest_sec=30,
                instructions="Support yourself on one forearm with hips lifted.",
            ),
        ),
    ),
)


def list_workouts(category: str | None = None) -> tuple[WorkoutDefinition, ...]:
    if category is None:
        return WORKOUTS
    return tuple(workout for workout in WORKOUTS if workout.category == category)


def list_categories() -> tuple[tuple[str, int], ...]:
    return tuple(
        (name, sum(1 for workout in WORKOUTS if workout.category == name))
        for name in CATEGORIES
    )


def get_workout(workout_id: str) -> WorkoutDefinition:
    workout = next((item for item in WORKOUTS if item.id == workout_id), None)
    if workout is None:
        raise ValueError(f"Unknown workout '{workout_id}'")
    return workout


def difficulty_label(difficulty: int) -> str:
    return DIFFICULTY_LABELS.get(difficulty, "Custom")
