"""
setup.py
"""

from setuptools import setup, find_packages

setup(
    name='minidp',
    version='1.0.0',
    description='Minimal SAML 2.0 Identity Provider endpoint (HTTP-Redirect in, HTTP-POST out).',
    license='Apache 2.0',
    packages=find_packages('src/'),
    package_dir={'': 'src'},
    python_requires='>=3.9',
    install_requires=[
        "defusedxml",
        "PyYAML",
        "gunicorn",
        "Werkzeug",
        "click",
        "chevron",
    ],
    extras_require={
        "test": ["pytest"],
    },
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    entry_points={
        "console_scripts": [
            "minidp=minidp.wsgi:main",
            "minidp-authn-request=minidp.scripts.minidp_authn_request:construct_authn_request",
        ]
    }
)
