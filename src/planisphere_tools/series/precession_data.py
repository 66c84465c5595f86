"""Long-term precession coefficients (Vondrak, Capitaine & Wallace 2011, A&A 534, A22).

Polynomial parts are in arcseconds per power of T (Julian centuries from J2000).
Periodic tables give the period in centuries, then cosine and sine amplitudes
in arcseconds for the two parameters of each pair.
"""

# Ecliptic pole P_A, Q_A: period, P cos, Q cos, P sin, Q sin
PQ_TERMS = (
    (708.15, -5486.751211, -684.661560, 667.666730, -5523.863691),
    (2309.00, -17.127623, 2446.283880, -2354.886252, -549.747450),
    (1620.00, -617.517403, 399.671049, -428.152441, -310.998056),
    (492.20, 413.442940, -356.652376, 376.202861, 421.535876),
    (1183.00, 78.614193, -186.387003, 184.778874, -36.776172),
    (622.00, -180.732815, -316.800070, 335.321713, -145.278396),
    (882.00, -87.676083, 198.296701, -185.138669, -34.744450),
    (547.00, 46.140315, 101.135679, -120.972830, 22.885731),
)

# Equatorial pole X_A, Y_A: period, X cos, Y cos, X sin, Y sin
XY_TERMS = (
    (256.75, -819.940624, 75004.344875, 81491.287984, 1558.515853),
    (708.15, -8444.676815, 624.033993, 787.163481, 7774.939698),
    (274.20, 2600.009459, 1251.136893, 1251.296102, -2219.534038),
    (241.45, 2755.175630, -1102.212834, -1257.950837, -2523.969396),
    (2309.00, -167.659835, -2660.664980, -2966.799730, 247.850422),
    (492.20, 871.855056, 699.291817, 639.744522, -846.485643),
    (396.10, 44.769698, 153.167220, 131.600209, -1393.124055),
    (288.90, -512.313065, -950.865637, -445.040117, 368.526116),
    (231.10, -819.415595, 499.754645, 584.522874, 749.045012),
    (1610.00, -538.071099, -145.188210, -89.756563, 444.704518),
    (620.00, -189.793622, 558.116553, 524.429630, 235.934465),
    (157.87, -402.922932, -23.923029, -13.549067, 374.049623),
    (220.30, 179.516345, -165.405086, -210.157124, -171.330180),
    (1200.00, -9.814756, 9.344131, -44.919798, -22.899655),
)

# General precession p_A and obliquity epsilon_A: period, p cos, p sin, eps cos, eps sin
P_EPSILON_TERMS = (
    (409.90, -6908.287473, -2845.175469, 753.872780, -1704.720302),
    (396.15, -3198.706291, 449.844989, -247.805823, -862.308358),
    (537.22, 1453.674527, -1255.915323, 379.471484, 447.832178),
    (402.90, -857.748557, 886.736783, -53.880558, -889.571909),
    (417.15, 1173.231614, 418.887514, -90.109153, 190.402846),
    (288.92, -156.981465, 997.912441, -353.600190, -56.564991),
    (4043.00, 371.836550, -240.979710, -63.115353, -296.222622),
    (306.00, -216.619040, 76.541307, -28.248187, -75.859952),
    (277.00, 193.691479, -36.788069, 17.703387, 67.473503),
    (203.00, 11.891524, -170.964086, 38.911307, 3.014055),
)

# Polynomials: coefficients of T**0 .. T**3, arcseconds
P_POLYNOMIAL = (5851.607687, -0.1189000, -0.00028913, 101e-9)
Q_POLYNOMIAL = (-1600.886300, 1.1689818, -0.00000020, -437e-9)
X_POLYNOMIAL = (5453.282155, 0.4252841, -0.00037173, -152e-9)
Y_POLYNOMIAL = (-73750.930350, -0.7675452, -0.00018725, 231e-9)
GENERAL_PRECESSION_POLYNOMIAL = (8134.017132, 5043.0520035, -0.00710733, 271e-9)
OBLIQUITY_POLYNOMIAL = (84028.206305, 0.3624445, -0.00004039, -110e-9)

OBLIQUITY_J2000_ARCSEC = 84381.406
