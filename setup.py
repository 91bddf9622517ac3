from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as fh:
    long_description = fh.read()
with open("sharpdown/semver.txt", encoding="utf-8") as fh:
    semver = fh.read().strip()
with open("requirements.txt", encoding="utf-8") as fh:
    install_requires = [x.strip() for x in fh.read().strip().split("\n") if len(x) and x[0].isalpha()]

setup(
    name="sharpdown",
    version=semver,
    description="A deterministic Markdown to HTML converter, faithful to the classic Markdown.pl dialect.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["sharpdown", "sharpdown.*"]),
    package_data={"sharpdown": ["semver.txt", "styles/*.css"]},
    include_package_data=True,
    install_requires=install_requires,
    extras_require={"test": ["pytest"]},
    python_requires=">=3.11",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.11",
        "Topic :: Text Processing :: Markup :: Markdown",
    ],
    entry_points={"console_scripts": ["sharpdown = sharpdown:main"]},
)
