"""
Script: build_tools_ci package
What: Holds the Python job bodies for the build-tools image workflow.
Doing: Groups CLI entrypoints, image naming rules, and shared docker helpers in one importable package.
Why: Keeps workflow YAML thin and puts tag/matrix/merge decisions where they can be tested.
Goal: Provide one maintainable home for checking, building, and publishing `neondatabase/build-tools`.
"""
