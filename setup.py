from setuptools import setup, find_packages

setup(
    name="tutorprompt",
    version="0.1.0",
    description="TutorPrompt: tutoring prompt generation and heuristic evaluation for five prompting techniques",
    author="Your Name",
    packages=find_packages(exclude=["tests", "experiments", "results"]),
    package_data={"tutorprompt": ["data/*.json"]},
    install_requires=[
        "tiktoken>=0.5.0",
    ],
    extras_require={
        "experiments": ["python-dotenv>=1.0.0"],
        "dev": ["pytest", "python-dotenv>=1.0.0"],
    },
    python_requires=">=3.9",
)
