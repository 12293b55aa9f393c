from setuptools import find_packages, setup

package_name = 'temi_location_bridge'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['test', 'test.*']),
    package_data={
        package_name: ['config/*.yaml'],
    },
    python_requires='>=3.11',
    install_requires=[
        'setuptools',
        'paho-mqtt>=2.0',
        'pyyaml',
        'nudged',
    ],
    zip_safe=True,
    maintainer='hansoo',
    maintainer_email='hansoo@todo.todo',
    description='MQTT location bridge for temi robots with survey-grid '
                'to map coordinate calibration',
    license='Apache-2.0',
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'location_relay = temi_location_bridge.presentation.relay_main:main',
            'location_controller = '
            'temi_location_bridge.presentation.controller_main:main',
        ],
    },
)
