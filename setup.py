import setuptools

setuptools.setup(
    name='wick_generator',
    author='Chenyang Li',
    author_email='bjyork0822@gmail.com',
    description='python package to evaluate operator products with the generalized Wick theorem',
    version="0.1.0",
    license='MIT',
    python_requires='>=3.8',
    packages=setuptools.find_packages(include=['wick_generator', 'wick_generator.*']),
    install_requires=['sympy'],
    extras_require={'test': ['pytest']}
)
